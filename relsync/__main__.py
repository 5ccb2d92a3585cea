from relsync.cli.app import main

main()
