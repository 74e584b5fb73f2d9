import os
import stat
import sys
from pathlib import Path

import pytest

posix_only = pytest.mark.skipif(sys.platform == 'win32', reason='stub dub is a shell script')


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv('DC', raising=False)
    monkeypatch.delenv('DUB', raising=False)


class StubDub:
    """A fake dub on PATH that records its arguments and exits with a fixed code."""

    def __init__(self, bin_dir: Path, system_path: str = os.defpath):
        self.bin_dir = bin_dir
        self.system_path = system_path
        self.path = bin_dir / 'dub'
        self.args_file = bin_dir / 'args.txt'

    def install(self, exit_code: int = 0, body: str = '') -> 'StubDub':
        script = (
            '#!/bin/sh\n'
            f'PATH="{self.system_path}"; export PATH\n'
            f'printf "%s\\n" "$@" > "{self.args_file}"\n'
            f'{body}\n'
            f'exit {exit_code}\n'
        )
        self.path.write_text(script)
        self.path.chmod(self.path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return self

    @property
    def called(self) -> bool:
        return self.args_file.exists()

    @property
    def args(self):
        return self.args_file.read_text().splitlines()


@pytest.fixture
def stub_dub(tmp_path, monkeypatch):
    bin_dir = tmp_path / 'bin'
    bin_dir.mkdir()
    system_path = os.environ.get('PATH', os.defpath)
    monkeypatch.setenv('PATH', str(bin_dir))
    return StubDub(bin_dir, system_path)


@pytest.fixture
def project_dir(tmp_path, monkeypatch):
    workdir = tmp_path / 'project'
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    return workdir
