from kbmedic.cli import main

main()
