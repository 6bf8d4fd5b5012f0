from .dino_client import main

main()
