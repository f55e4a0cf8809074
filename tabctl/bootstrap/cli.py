from tabctl.bootstrap.deps import get_cli
from tabula.core.helpers.utils import scan, setup_logging


@scan("tabctl.bootstrap.commands")
def main():
    cli = get_cli()
    setup_logging(cli.args.log_level or cli.config.log_level)
    cli.run()


if __name__ == "__main__":
    main()
