"""
Main CLI interface for cargo-dub.
"""
import argparse
import shlex
import sys
from dataclasses import replace
from typing import Callable, List, Optional

from colorama import init, Fore, Style
from tabulate import tabulate

from cargo_dub import __version__
from cargo_dub.commands import (
    PROJECT_TYPES, Add, Build, Clean, Convert, Describe, DubOptions, Fetch,
    Init, Lint, Raw, Remove, Run, Subcommand, build_invocation,
)
from cargo_dub.errors import (
    CargoDubError, ExternalToolNotFound, UsageError, EXIT_INTERRUPTED, EXIT_NOT_EXECUTABLE,
)
from cargo_dub.managers.base_manager import BaseToolRunner
from cargo_dub.managers.dub_manager import DubManager
from cargo_dub.utils.config import DUB_ENV, Settings

# Initialize colorama for cross-platform colored output
init(autoreset=True)

PROG = 'cargo-dub'

# cargo runs `cargo-dub dub <args>` for `cargo dub <args>`
CARGO_PREFIX = 'dub'


class ArgumentParser(argparse.ArgumentParser):
    """argparse parser that raises UsageError instead of exiting."""

    def error(self, message):
        raise UsageError(message, self.format_usage())


class CargoDubCLI:
    """Runs parsed subcommands through the dub binary."""

    def __init__(self, settings: Optional[Settings] = None,
                 manager: Optional[BaseToolRunner] = None, verbose: bool = False):
        self.settings = settings or Settings.from_env()
        self.manager = manager or DubManager(override=self.settings.dub)
        self.verbose = verbose

    def execute(self, cmd: Subcommand) -> int:
        """
        Run a subcommand and wait for dub to finish.

        Args:
            cmd: Parsed subcommand
        Returns:
            dub's exit code
        """
        invocation = build_invocation(cmd)
        if hasattr(self.manager, 'preflight'):
            self.manager.preflight(cmd)
        if self.verbose:
            return self.manager.run(invocation, announce=self._announce)
        return self.manager.run(invocation)

    @staticmethod
    def _announce(command: List[str]) -> None:
        line = ' '.join(shlex.quote(arg) for arg in command)
        print(f"{Fore.CYAN}Running: {line}{Style.RESET_ALL}", file=sys.stderr)


def _add_dub_options(parser: argparse.ArgumentParser) -> None:
    group = parser.add_argument_group('dub options')
    group.add_argument('--compiler', help='D compiler to use (defaults to $DC)')
    group.add_argument('-b', '--build', help='build type (debug, release, unittest, ...)')
    group.add_argument('-c', '--config', help='build configuration')
    group.add_argument('-a', '--arch', help='target architecture')
    group.add_argument('--rdmd', action='store_true', help='use rdmd instead of the compiler directly')
    group.add_argument('--temp-build', action='store_true', help='build in a temporary directory')
    group.add_argument('-f', '--force', action='store_true', help='force a rebuild')
    group.add_argument('--nodeps', action='store_true', help='do not resolve missing dependencies')
    group.add_argument('--deep', action='store_true', help='build all dependencies, even for libraries')
    group.add_argument('--d-version', dest='d_versions', action='append', default=[],
                       metavar='VERSION', help='define a version identifier (repeatable)')
    group.add_argument('-d', '--debug', action='append', default=[],
                       help='define a debug identifier (repeatable)')
    group.add_argument('--override-config', action='append', default=[],
                       metavar='PACKAGE/CONFIG', help='override a dependency configuration (repeatable)')
    group.add_argument('--yes', action='store_true', help='answer yes to all prompts')
    group.add_argument('--non-interactive', action='store_true', help='do not prompt for input')


def _options(ns: argparse.Namespace, settings: Settings) -> DubOptions:
    return DubOptions(
        compiler=ns.compiler or settings.compiler,
        build=ns.build,
        config=ns.config,
        arch=ns.arch,
        rdmd=ns.rdmd,
        temp_build=ns.temp_build,
        force=ns.force,
        nodeps=ns.nodeps,
        deep=ns.deep,
        yes=ns.yes,
        non_interactive=ns.non_interactive,
        d_versions=list(ns.d_versions),
        debug=list(ns.debug),
        override_config=list(ns.override_config),
    )


def _make_run(ns, settings):
    return Run(_options(ns, settings))


def _make_build(ns, settings):
    return Build(_options(ns, settings))


def _make_convert(ns, settings):
    return Convert(format=ns.format, stdout=ns.stdout)


def _make_describe(ns, settings):
    data: List[str] = []
    for value in ns.data:
        data.extend(item for item in value.split(',') if item)
    return Describe(data=data, data_list=ns.data_list, options=_options(ns, settings))


def _make_add(ns, settings):
    return Add(packages=list(ns.packages), options=_options(ns, settings))


def _make_remove(ns, settings):
    return Remove(packages=list(ns.packages), options=_options(ns, settings))


def _make_fetch(ns, settings):
    return Fetch(package=ns.package, cache=ns.cache, options=_options(ns, settings))


def _make_raw(ns, settings):
    return Raw(list(ns.args))


def _make_init(ns, settings):
    # --non-interactive belongs to init itself and is emitted right after --type
    options = _options(ns, settings)
    return Init(
        directory=ns.directory,
        dependencies=list(ns.dependencies),
        type=ns.type,
        non_interactive=options.non_interactive,
        options=replace(options, non_interactive=False),
    )


def _make_clean(ns, settings):
    return Clean(package=ns.package, all_packages=ns.all_packages, options=_options(ns, settings))


def _make_lint(ns, settings):
    return Lint(
        package=ns.package,
        syntax_check=ns.syntax_check,
        style_check=ns.style_check,
        error_format=ns.error_format,
        report=ns.report,
        report_format=ns.report_format,
        report_file=ns.report_file,
        import_paths=list(ns.import_paths),
        dscanner_config=ns.dscanner_config,
        options=_options(ns, settings),
    )


Factory = Callable[[argparse.Namespace, Settings], Subcommand]


def build_parser() -> ArgumentParser:
    """Create the top-level parser with one subparser per dub command."""
    parser = ArgumentParser(
        prog=PROG,
        description='Run DUB, the D package manager, with familiar subcommands',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s                          # Build and run the package in the current directory
    %(prog)s build -b release         # Release build
    %(prog)s add vibe-d@0.9.8         # Add a dependency
    %(prog)s convert -f json          # Convert dub.sdl to dub.json
    %(prog)s raw upgrade --missing-only
                """
    )
    parser.add_argument('-V', '--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='print the dub command line before running it')

    subparsers = parser.add_subparsers(dest='command', metavar='<command>')

    def command(name: str, factory: Factory, summary: str, aliases: Optional[List[str]] = None,
                dub_options: bool = True) -> argparse.ArgumentParser:
        sub = subparsers.add_parser(name, help=summary, description=summary, aliases=aliases or [])
        if dub_options:
            _add_dub_options(sub)
        sub.set_defaults(factory=factory)
        return sub

    command('run', _make_run, 'Build and run package', aliases=['r'])
    command('build', _make_build, 'Build package', aliases=['b'])

    sub = command('convert', _make_convert, 'Convert dub.json/dub.sdl', dub_options=False)
    sub.add_argument('-f', '--format', required=True, choices=['json', 'sdl'],
                     help='target format (json reads dub.sdl, sdl reads dub.json)')
    sub.add_argument('--stdout', action='store_true', help='print the result instead of writing a file')

    # parse_command splits these off before parsing so option-like values survive
    sub = command('raw', _make_raw, 'Pass raw arguments to dub', dub_options=False)
    sub.add_argument('args', nargs='*', metavar='ARGS', help='arguments forwarded verbatim')

    sub = command('describe', _make_describe, 'Print JSON build description for package and dependencies')
    sub.add_argument('--data', action='append', default=[], metavar='NAME[,NAME...]',
                     help='list only the given build settings (repeatable, comma separated)')
    sub.add_argument('--data-list', action='store_true', help='print --data values as a plain list')

    sub = command('add', _make_add, 'Add packages as dependencies')
    sub.add_argument('packages', nargs='+', metavar='PACKAGE[@VERSION]')

    sub = command('remove', _make_remove, 'Remove packages from dependencies')
    sub.add_argument('packages', nargs='+', metavar='PACKAGE[@VERSION]')

    sub = command('fetch', _make_fetch, 'Fetch packages to a shared location')
    sub.add_argument('package', metavar='PACKAGE[@VERSION]')
    sub.add_argument('--cache', help='cache location (local, system, user)')

    sub = command('init', _make_init, 'Initialize an empty package')
    sub.add_argument('directory', nargs='?', metavar='DIRECTORY')
    sub.add_argument('dependencies', nargs='*', metavar='DEPENDENCY')
    sub.add_argument('-t', '--type', choices=sorted(PROJECT_TYPES), default='minimal',
                     help='project template (default: minimal)')

    sub = command('clean', _make_clean, 'Remove cached build files')
    sub.add_argument('package', nargs='?', metavar='PACKAGE')
    sub.add_argument('--all-packages', action='store_true', help='clean all known packages')

    sub = command('lint', _make_lint, 'Run D-Scanner linter tests')
    sub.add_argument('package', nargs='?', metavar='PACKAGE[@VERSION]')
    sub.add_argument('--syntax-check', action='store_true')
    sub.add_argument('--style-check', action='store_true')
    sub.add_argument('--error-format')
    sub.add_argument('--report', action='store_true')
    sub.add_argument('--report-format')
    sub.add_argument('--report-file')
    sub.add_argument('--import-paths', action='append', default=[], metavar='PATH')
    sub.add_argument('--dscanner-config')

    return parser


def _command_index(argv: List[str]) -> int:
    """Position of the first token that is not a top-level option."""
    for idx, arg in enumerate(argv):
        if not arg.startswith('-'):
            return idx
    return len(argv)


def parse_command(argv: List[str], settings: Optional[Settings] = None):
    """
    Parse command-line arguments into a subcommand.

    Args:
        argv: Arguments without the program name
        settings: Environment defaults (read from os.environ if omitted)
    Returns:
        Tuple of (subcommand, verbose flag)
    Raises:
        UsageError: on unknown commands, missing or malformed arguments
    """
    settings = settings or Settings.from_env()
    argv = list(argv)

    idx = _command_index(argv)
    if idx < len(argv) and argv[idx] == CARGO_PREFIX:
        del argv[idx]

    raw_args: Optional[List[str]] = None
    if idx < len(argv) and argv[idx] == 'raw':
        argv, raw_args = argv[:idx + 1], argv[idx + 1:]

    ns = build_parser().parse_args(argv)

    if raw_args is not None:
        ns.args = raw_args
    if ns.command is None:
        return Run(DubOptions(compiler=settings.compiler)), ns.verbose
    return ns.factory(ns, settings), ns.verbose


def _report_missing_tool(err: ExternalToolNotFound) -> None:
    status = 'not executable' if err.exit_code == EXIT_NOT_EXECUTABLE else 'not found'
    print(f"{Fore.RED}Error: {err}{Style.RESET_ALL}", file=sys.stderr)
    if err.candidates:
        rows: List[List[str]] = [[candidate, status] for candidate in err.candidates]
        print(tabulate(rows, headers=['Tried', 'Result'], tablefmt='grid'), file=sys.stderr)
    print(f"{Fore.YELLOW}Tip: put dub on PATH or set {DUB_ENV} to its location{Style.RESET_ALL}",
          file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    if argv is None:
        argv = sys.argv[1:]
    settings = Settings.from_env()

    try:
        cmd, verbose = parse_command(argv, settings)
        cli = CargoDubCLI(settings=settings, verbose=verbose)
        return cli.execute(cmd)
    except UsageError as e:
        if e.usage:
            print(e.usage, end='', file=sys.stderr)
        print(f"{Fore.RED}Error: {e}{Style.RESET_ALL}", file=sys.stderr)
        return e.exit_code
    except ExternalToolNotFound as e:
        _report_missing_tool(e)
        return e.exit_code
    except CargoDubError as e:
        print(f"{Fore.RED}Error: {e}{Style.RESET_ALL}", file=sys.stderr)
        return e.exit_code
    except KeyboardInterrupt:
        print(f"\n{Fore.YELLOW}Interrupted{Style.RESET_ALL}", file=sys.stderr)
        return EXIT_INTERRUPTED


if __name__ == '__main__':
    sys.exit(main())
