from .cli import main

main(prog_name="xlsx-to-csv")
