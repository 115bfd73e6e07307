from hydrolift.cli.main import main

main()
