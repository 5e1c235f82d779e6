from dcformula.cli.app import main

main()
