from .multi_server import main

main()
