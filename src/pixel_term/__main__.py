from pixel_term.cli.main import main

main()
