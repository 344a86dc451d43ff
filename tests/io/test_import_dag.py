from __future__ import annotations

import subprocess
import sys


def test_core_does_not_import_io_or_dataframe_stack() -> None:
    code = (
        "import sys\n"
        "import recjson.core\n"
        "bad = [m for m in ('polars', 'pyarrow', 'recjson.io') if m in sys.modules]\n"
        "print(','.join(bad))\n"
    )
    proc = subprocess.run([sys.executable, "-c", code], capture_output=True, text=True, check=True)
    assert proc.stdout.strip() == ""


def test_io_package_exports() -> None:
    import recjson.io as rio

    for name in rio.__all__:
        assert hasattr(rio, name), name
