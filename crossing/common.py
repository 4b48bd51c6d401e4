"""Common miscellaneous functions for crossing."""

import click

import crossing.types

# Standard output is reserved for the version report, so diagnostics go to
# standard error.


def conditional_echo_verbose(opts: crossing.types.PutOptions, message: str) -> None:
    """Echo verbose messages if verbose level is configured."""
    if opts["verbose"]:
        click.echo(message, err=True)


def conditional_echo_debug(opts: crossing.types.PutOptions, message: str) -> None:
    """Echo debug messages if debug level is configured."""
    if opts["debug"]:
        click.echo(message, err=True)
