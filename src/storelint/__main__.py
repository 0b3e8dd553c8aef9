from storelint.cli import main

main()
