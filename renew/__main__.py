from renew.cli import main

main()
