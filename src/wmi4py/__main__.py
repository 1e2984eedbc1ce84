from wmi4py.cli import main

main()
