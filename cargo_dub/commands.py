"""
Typed subcommands and their translation into DUB command lines.

Every subcommand is a small dataclass. `build_invocation` turns one of them
into the argument list handed to the dub binary; it never touches the
filesystem, the environment or any process, so it can be tested on its own.
"""
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Union


FORMAT_SOURCES: Dict[str, str] = {
    'json': 'dub.sdl',
    'sdl': 'dub.json',
}

PROJECT_TYPES: Dict[str, str] = {
    'minimal': 'minimal',
    'vibe-d': 'vibe.d',
    'deimos': 'deimos',
    'custom': 'custom',
}


@dataclass(frozen=True)
class DubOptions:
    """Build options shared by most dub commands."""

    compiler: Optional[str] = None
    build: Optional[str] = None
    config: Optional[str] = None
    arch: Optional[str] = None
    rdmd: bool = False
    temp_build: bool = False
    force: bool = False
    nodeps: bool = False
    deep: bool = False
    yes: bool = False
    non_interactive: bool = False
    d_versions: List[str] = field(default_factory=list)
    debug: List[str] = field(default_factory=list)
    override_config: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class Run:
    options: DubOptions = field(default_factory=DubOptions)


@dataclass(frozen=True)
class Build:
    options: DubOptions = field(default_factory=DubOptions)


@dataclass(frozen=True)
class Convert:
    """Convert between dub.sdl and dub.json; `format` is the target."""

    format: str
    stdout: bool = False

    @property
    def source(self) -> str:
        return FORMAT_SOURCES[self.format]


@dataclass(frozen=True)
class Raw:
    args: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class Describe:
    data: List[str] = field(default_factory=list)
    data_list: bool = False
    options: DubOptions = field(default_factory=DubOptions)


@dataclass(frozen=True)
class Add:
    packages: List[str]
    options: DubOptions = field(default_factory=DubOptions)


@dataclass(frozen=True)
class Remove:
    packages: List[str]
    options: DubOptions = field(default_factory=DubOptions)


@dataclass(frozen=True)
class Fetch:
    package: str
    cache: Optional[str] = None
    options: DubOptions = field(default_factory=DubOptions)


@dataclass(frozen=True)
class Init:
    directory: Optional[str] = None
    dependencies: List[str] = field(default_factory=list)
    type: str = 'minimal'
    non_interactive: bool = False
    options: DubOptions = field(default_factory=DubOptions)


@dataclass(frozen=True)
class Clean:
    package: Optional[str] = None
    all_packages: bool = False
    options: DubOptions = field(default_factory=DubOptions)


@dataclass(frozen=True)
class Lint:
    package: Optional[str] = None
    syntax_check: bool = False
    style_check: bool = False
    error_format: Optional[str] = None
    report: bool = False
    report_format: Optional[str] = None
    report_file: Optional[str] = None
    import_paths: List[str] = field(default_factory=list)
    dscanner_config: Optional[str] = None
    options: DubOptions = field(default_factory=DubOptions)


Subcommand = Union[Run, Build, Convert, Raw, Describe, Add, Remove, Fetch, Init, Clean, Lint]


def dub_option_args(opts: DubOptions) -> List[str]:
    """
    Render shared build options as dub flags.

    Args:
        opts: Shared build options

    Returns:
        Flags in the order dub documents them
    """
    args: List[str] = []
    if opts.compiler:
        args.append(f"--compiler={opts.compiler}")
    if opts.build:
        args.append(f"--build={opts.build}")
    if opts.config:
        args.append(f"--config={opts.config}")
    if opts.arch:
        args.append(f"--arch={opts.arch}")

    switches = [
        ('--rdmd', opts.rdmd),
        ('--temp-build', opts.temp_build),
        ('--force', opts.force),
        ('--deep', opts.deep),
        ('--nodeps', opts.nodeps),
        ('--yes', opts.yes),
        ('--non-interactive', opts.non_interactive),
    ]
    args.extend(flag for flag, enabled in switches if enabled)

    args.extend(f"--d-version={version}" for version in opts.d_versions)
    args.extend(f"--debug={debug}" for debug in opts.debug)
    args.extend(f"--override-config={config}" for config in opts.override_config)
    return args


def _run(cmd: Run) -> List[str]:
    return ['run'] + dub_option_args(cmd.options)


def _build(cmd: Build) -> List[str]:
    return ['build'] + dub_option_args(cmd.options)


def _convert(cmd: Convert) -> List[str]:
    args = ['convert', f"--format={cmd.format}"]
    if cmd.stdout:
        args.append('--stdout')
    return args


def _raw(cmd: Raw) -> List[str]:
    return list(cmd.args)


def _describe(cmd: Describe) -> List[str]:
    args = ['describe']
    args.extend(f"--data={item}" for item in cmd.data)
    if cmd.data_list:
        args.append('--data-list')
    return args + dub_option_args(cmd.options)


def _add(cmd: Add) -> List[str]:
    return ['add'] + list(cmd.packages) + dub_option_args(cmd.options)


def _remove(cmd: Remove) -> List[str]:
    return ['remove'] + list(cmd.packages) + dub_option_args(cmd.options)


def _fetch(cmd: Fetch) -> List[str]:
    args = ['fetch', cmd.package]
    if cmd.cache:
        args.append(f"--cache={cmd.cache}")
    return args + dub_option_args(cmd.options)


def _init(cmd: Init) -> List[str]:
    args = ['init']
    if cmd.directory:
        args.append(cmd.directory)
    args.extend(cmd.dependencies)
    args.append(f"--type={PROJECT_TYPES[cmd.type]}")
    if cmd.non_interactive:
        args.append('--non-interactive')
    return args + dub_option_args(cmd.options)


def _clean(cmd: Clean) -> List[str]:
    args = ['clean']
    if cmd.package:
        args.append(cmd.package)
    if cmd.all_packages:
        args.append('--all-packages')
    return args + dub_option_args(cmd.options)


def _lint(cmd: Lint) -> List[str]:
    # dub's lint command fetches and drives D-Scanner
    args = ['lint']
    if cmd.package:
        args.append(cmd.package)
    if cmd.syntax_check:
        args.append('--syntax-check')
    if cmd.style_check:
        args.append('--style-check')
    if cmd.error_format:
        args.append(f"--error-format={cmd.error_format}")
    if cmd.report:
        args.append('--report')
    if cmd.report_format:
        args.append(f"--report-format={cmd.report_format}")
    if cmd.report_file:
        args.append(f"--report-file={cmd.report_file}")
    args.extend(f"--import-paths={path}" for path in cmd.import_paths)
    if cmd.dscanner_config:
        args.append(f"--dscanner-config={cmd.dscanner_config}")
    return args + dub_option_args(cmd.options)


_BUILDERS: Dict[type, Callable[..., List[str]]] = {
    Run: _run,
    Build: _build,
    Convert: _convert,
    Raw: _raw,
    Describe: _describe,
    Add: _add,
    Remove: _remove,
    Fetch: _fetch,
    Init: _init,
    Clean: _clean,
    Lint: _lint,
}


def build_invocation(cmd: Subcommand) -> List[str]:
    """
    Translate a subcommand into the arguments passed to dub.

    Args:
        cmd: Parsed subcommand

    Returns:
        Argument list, without the executable itself
    """
    try:
        builder = _BUILDERS[type(cmd)]
    except KeyError:
        raise TypeError(f"Unsupported subcommand: {cmd!r}") from None
    return builder(cmd)
