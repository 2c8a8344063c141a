from typing import Optional

import click

from .cli_config import load_config
from .error_handling import ErrorCategory, MissingFieldError, UsageError, get_error_handler
from .parsers import generate_requirements
from .structured_logging import configure_logging

__version__ = "1.0.0"

USAGE_MESSAGE = (
    "Please provide the path to the Jenkins Enterprise WAR pom.xml "
    "as the first and only argument"
)


def _setup_logging() -> None:
    config = load_config()
    configure_logging(
        config.logging.log_level,
        enable_json=config.logging.enable_json,
        log_format=config.logging.log_format,
    )


@click.command()
@click.argument("pom_path", required=False, type=click.Path(dir_okay=False))
@click.version_option(__version__, prog_name="list-enterprise-plugins")
def cli(pom_path: Optional[str]) -> None:
    """
    Print the provided hpi plugins of a Jenkins Enterprise WAR pom.xml.

    Each <dependency> under <project><dependencies> with scope "provided"
    and type "hpi" becomes one line of the form:

      require("<artifactId>","<version>"),

    Examples:

      list-enterprise-plugins war/pom.xml

      list-enterprise-plugins war/pom.xml > plugins.inc
    """
    if pom_path is None:
        raise UsageError(USAGE_MESSAGE)

    _setup_logging()

    try:
        for line in generate_requirements(pom_path):
            click.echo(line)
    except MissingFieldError as e:
        get_error_handler().error(
            ErrorCategory.VALIDATION,
            str(e),
            "main",
            "cli",
            exception=e,
            details={"field": e.field_name, "position": e.position},
            suggestions=["Every provided hpi dependency needs an artifactId and a version"],
        )
        raise


if __name__ == "__main__":
    cli()
