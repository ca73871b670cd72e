# tagedit/__main__.py
import sys


def cli(argv=None):
    """
    Minimal launcher so you can run:
      - python3 -m tagedit [options] FILE...
    """
    from .tags.cli import main
    return main(argv)

if __name__ == "__main__":
    sys.exit(cli())
