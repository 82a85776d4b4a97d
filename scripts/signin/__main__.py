from scripts.signin.cli import main

main()
