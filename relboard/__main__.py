from relboard.cli.app import main

main()
