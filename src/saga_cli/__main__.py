from saga_cli import main

main()
