from precheck.cli import main

main()
