from momo.cli import main

main()
