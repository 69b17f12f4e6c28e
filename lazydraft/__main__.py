from lazydraft.cli import main

main()
