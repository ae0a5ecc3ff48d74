from docbrowse.cli import main

main()
