from fpgadense.cli import main

main()
