"""Mapping from subcommands to dub argument lists. No processes involved."""

import pytest

from cargo_dub.commands import (
    Add, Build, Clean, Convert, Describe, DubOptions, Fetch, Init, Lint, Raw,
    Remove, Run, build_invocation, dub_option_args,
)


def test_dub_option_args_full():
    opts = DubOptions(
        compiler='ldc2',
        build='release',
        config='test-config',
        arch='x86_64',
        rdmd=True,
        temp_build=True,
        force=True,
        nodeps=False,
        deep=True,
        d_versions=['ver1', 'ver2'],
        debug=['debug1'],
        override_config=['conf1'],
        yes=True,
        non_interactive=False,
    )

    assert dub_option_args(opts) == [
        '--compiler=ldc2',
        '--build=release',
        '--config=test-config',
        '--arch=x86_64',
        '--rdmd',
        '--temp-build',
        '--force',
        '--deep',
        '--yes',
        '--d-version=ver1',
        '--d-version=ver2',
        '--debug=debug1',
        '--override-config=conf1',
    ]


def test_dub_option_args_empty():
    assert dub_option_args(DubOptions()) == []


def test_nodeps_and_non_interactive_follow_deep():
    opts = DubOptions(deep=True, nodeps=True, yes=True, non_interactive=True)
    assert dub_option_args(opts) == ['--deep', '--nodeps', '--yes', '--non-interactive']


@pytest.mark.parametrize('cmd, expected', [
    (Run(), ['run']),
    (Build(), ['build']),
    (Build(DubOptions(build='release', force=True)), ['build', '--build=release', '--force']),
    (Run(DubOptions(compiler='dmd')), ['run', '--compiler=dmd']),
])
def test_run_and_build(cmd, expected):
    assert build_invocation(cmd) == expected


def test_convert_formats():
    assert build_invocation(Convert(format='json')) == ['convert', '--format=json']
    assert build_invocation(Convert(format='sdl', stdout=True)) == ['convert', '--format=sdl', '--stdout']


def test_convert_source_is_the_other_manifest():
    assert Convert(format='json').source == 'dub.sdl'
    assert Convert(format='sdl').source == 'dub.json'


def test_raw_is_forwarded_verbatim():
    args = ['upgrade', '--missing-only', '-v', '--', 'odd arg']
    assert build_invocation(Raw(args)) == args


def test_raw_empty():
    assert build_invocation(Raw()) == []


def test_describe():
    cmd = Describe(
        data=['main-source-file', 'libs'],
        data_list=True,
        options=DubOptions(compiler='ldc2'),
    )
    assert build_invocation(cmd) == [
        'describe',
        '--data=main-source-file',
        '--data=libs',
        '--data-list',
        '--compiler=ldc2',
    ]


def test_add():
    cmd = Add(packages=['vibelog@1.0.0', 'libdparse'], options=DubOptions(yes=True))
    assert build_invocation(cmd) == ['add', 'vibelog@1.0.0', 'libdparse', '--yes']


def test_add_plain_packages():
    assert build_invocation(Add(packages=['foo', 'bar'])) == ['add', 'foo', 'bar']


def test_remove():
    cmd = Remove(packages=['vibelog@1.0.0'], options=DubOptions(force=True))
    assert build_invocation(cmd) == ['remove', 'vibelog@1.0.0', '--force']


def test_fetch():
    cmd = Fetch(package='vibelog@1.0.0', cache='local', options=DubOptions(yes=True))
    assert build_invocation(cmd) == ['fetch', 'vibelog@1.0.0', '--cache=local', '--yes']


def test_fetch_without_cache():
    assert build_invocation(Fetch(package='vibelog')) == ['fetch', 'vibelog']


def test_init_full():
    cmd = Init(
        directory='my_project',
        dependencies=['vibelog@1.0.0'],
        type='vibe-d',
        non_interactive=True,
        options=DubOptions(yes=True),
    )
    assert build_invocation(cmd) == [
        'init',
        'my_project',
        'vibelog@1.0.0',
        '--type=vibe.d',
        '--non-interactive',
        '--yes',
    ]


def test_init_minimal():
    assert build_invocation(Init()) == ['init', '--type=minimal']


def test_clean():
    cmd = Clean(package='my_package', options=DubOptions(force=True))
    assert build_invocation(cmd) == ['clean', 'my_package', '--force']


def test_clean_all_packages():
    assert build_invocation(Clean(all_packages=True)) == ['clean', '--all-packages']


def test_lint():
    cmd = Lint(
        package='my_package@1.0.0',
        syntax_check=True,
        style_check=True,
        error_format='custom',
        report=True,
        report_format='json',
        report_file='report.json',
        import_paths=['src'],
        dscanner_config='dscanner.ini',
        options=DubOptions(yes=True),
    )
    assert build_invocation(cmd) == [
        'lint',
        'my_package@1.0.0',
        '--syntax-check',
        '--style-check',
        '--error-format=custom',
        '--report',
        '--report-format=json',
        '--report-file=report.json',
        '--import-paths=src',
        '--dscanner-config=dscanner.ini',
        '--yes',
    ]


def test_lint_defaults():
    assert build_invocation(Lint()) == ['lint']


def test_unknown_subcommand_type():
    with pytest.raises(TypeError):
        build_invocation(object())
