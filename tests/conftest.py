import asyncio
import inspect
from pathlib import Path
import sys
from collections.abc import Iterator

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from assethash.config import override_runtime_env  # noqa: E402
from assethash.storage.memory import MemoryFileSystem  # noqa: E402
from tests.helpers import INDEX_HTML, SCRIPT_JS, STYLES_CSS, TEXT_TXT  # noqa: E402


@pytest.hookimpl(tryfirst=True)
def pytest_pyfunc_call(pyfuncitem: pytest.Function) -> bool | None:
    marker = pyfuncitem.get_closest_marker("asyncio")
    if marker is None:
        return None
    test_func = pyfuncitem.obj
    if not inspect.iscoroutinefunction(test_func):
        return None
    fixtureinfo = getattr(pyfuncitem, "_fixtureinfo", None)
    if fixtureinfo is None:
        return None
    kwargs = {name: pyfuncitem.funcargs[name] for name in fixtureinfo.argnames}
    asyncio.run(test_func(**kwargs))
    return True


@pytest.fixture(autouse=True)
def _runtime_env() -> Iterator[None]:
    override_runtime_env({})
    try:
        yield
    finally:
        override_runtime_env(None)


@pytest.fixture()
def asset_files() -> dict[str, bytes]:
    return {
        "testdata/subdir1/script.js": SCRIPT_JS,
        "testdata/subdir1/styles.min.css": STYLES_CSS,
        "testdata/subdir1/indexhtml": INDEX_HTML,
        "testdata/sub.dir.2/text.txt": TEXT_TXT,
    }


@pytest.fixture()
def memory_fs(asset_files: dict[str, bytes]) -> MemoryFileSystem:
    return MemoryFileSystem(asset_files)


@pytest.fixture()
def static_dir(tmp_path: Path, asset_files: dict[str, bytes]) -> Path:
    root = tmp_path / "static"
    for relative, content in asset_files.items():
        target = root / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)
    return root
