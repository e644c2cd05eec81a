import click
from oasdelta_cli.tools.compare import compare
from oasdelta_cli.tools.rules import rules


@click.group()
def cli():
    pass


# add cli commands here

cli.add_command(compare)
cli.add_command(rules)
