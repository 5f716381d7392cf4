"""
CLI entry point, when used as a module: `python -m kformat`.

Useful for debugging in the IDEs (use the start-mode "Module", module "kformat").
"""
from kformat import cli

if __name__ == '__main__':
    cli.main()
