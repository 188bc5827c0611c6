"""Run the konf command line tool with `python -m konf`."""

from konf.tool.konf import main

if __name__ == "__main__":
    main()
