"""Driver for the solc Solidity compiler."""

from __future__ import annotations

import json
import os
import shutil
import subprocess
import tempfile
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import requests

_COMBINED_OUTPUTS = "bin,bin-runtime,srcmap-runtime,abi,srcmap,ast"
_RELEASE_URL = "https://github.com/ethereum/solidity/releases/download/v{version}/solc-static-linux"


def _member(doc: Mapping[str, Any], name: str) -> Any:
    if name in doc:
        return doc[name]
    lowered = name.lower()
    for key, value in doc.items():
        if key.lower() == lowered:
            return value
    return None


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value)


@dataclass
class Artifact:
    """The compiled form of one contract."""

    abi: str = ""
    bin: str = ""
    bin_runtime: str = ""
    src_map: str = ""
    src_map_runtime: str = ""

    @classmethod
    def _from_json(cls, doc: Mapping[str, Any]) -> Artifact:
        return cls(
            abi=_text(_member(doc, "abi")),
            bin=_text(_member(doc, "bin")),
            bin_runtime=_text(_member(doc, "bin-runtime")),
            src_map=_text(_member(doc, "srcmap")),
            src_map_runtime=_text(_member(doc, "srcmap-runtime")),
        )


@dataclass
class Source:
    """The syntax tree of one source unit."""

    ast: dict[str, Any] = field(default_factory=dict)


@dataclass
class Output:
    """The combined JSON output of a compilation."""

    contracts: dict[str, Artifact] = field(default_factory=dict)
    sources: dict[str, Source] = field(default_factory=dict)
    version: str = ""

    @classmethod
    def _from_json(cls, raw: bytes) -> Output:
        doc = json.loads(raw)
        if not isinstance(doc, dict):
            raise ValueError("compiler output must be a json object")
        contracts = _member(doc, "contracts") or {}
        sources = _member(doc, "sources") or {}
        return cls(
            contracts={name: Artifact._from_json(entry) for name, entry in contracts.items()},
            sources={
                name: Source(ast=dict(_member(entry, "AST") or {}))
                for name, entry in sources.items()
            },
            version=_text(_member(doc, "version")),
        )


class Solidity:
    """Compiles Solidity code with the solc binary found at ``path``."""

    def __init__(self, path: str) -> None:
        self.path = path

    def compile_code(self, code: str) -> Output:
        """Compile Solidity source given as text."""
        if not code:
            raise ValueError("code is empty")
        return self._compile(code, ())

    def compile(self, *args: str) -> Output:
        """Compile the Solidity files given."""
        if not args:
            raise ValueError("no input files")
        return self._compile("", args)

    def _compile(self, code: str, files: tuple[str, ...]) -> Output:
        cmd = [self.path, "--combined-json", _COMBINED_OUTPUTS]
        if code:
            cmd.append("-")
        cmd.extend(files)
        try:
            proc = subprocess.run(
                cmd,
                input=code.encode("utf-8") if code else None,
                stdin=None if code else subprocess.DEVNULL,
                capture_output=True,
                check=False,
            )
        except OSError as exc:
            raise RuntimeError(f"failed to compile: {exc}") from exc
        if proc.returncode != 0:
            raise RuntimeError(f"failed to compile: {proc.stderr.decode('utf-8', 'replace')}")
        return Output._from_json(proc.stdout)


def download_solidity(version: str, dst: str, rename_dst: bool) -> None:
    """Download the static Linux solc release into directory ``dst``."""
    url = _RELEASE_URL.format(version=version)

    if os.path.exists(dst):
        if os.path.isfile(dst):
            raise ValueError("dst is a file")
    else:
        try:
            os.makedirs(dst, mode=0o755, exist_ok=True)
        except OSError as exc:
            raise OSError(f"cannot create dst path: {exc}") from exc

    name = f"solidity-{version}" if rename_dst else "solidity"

    with tempfile.TemporaryDirectory(prefix="solc-") as tmp_dir:
        path = os.path.join(tmp_dir, name)
        resp = requests.get(url, stream=True, timeout=120)
        try:
            resp.raise_for_status()
            with open(path, "wb") as out:
                for chunk in resp.iter_content(chunk_size=65536):
                    out.write(chunk)
        finally:
            resp.close()
        os.chmod(path, 0o755)
        shutil.move(path, os.path.join(dst, name))