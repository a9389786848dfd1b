from extgen.cli import main

main()
