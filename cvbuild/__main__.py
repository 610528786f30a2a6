import sys

import click

from cvbuild import cli
from cvbuild import error
from cvbuild import log


def main(args=None):
    try:
        rc = cli.cli.main(args=args, prog_name="cvbuild", standalone_mode=False)
    except click.ClickException as e:
        e.show()
        sys.exit(1)
    except click.Abort:
        log.warning("Interrupted by user")
        sys.exit(1)
    except error.CvBuildError as e:
        log.error(log.format_exception_msg(e))
        sys.exit(1)
    except Exception as e:
        log.exception(e, error=True)
        sys.exit(1)
    sys.exit(rc or 0)


if __name__ == "__main__":
    main()
