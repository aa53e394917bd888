from stepreport.cli import main

main()
