import re
from pathlib import Path

import meshcombine

DOCS_DIR = Path(__file__).resolve().parents[1] / "docs"


def test_index_page_documents_public_names():
    index = (DOCS_DIR / "index.rst").read_text(encoding="utf-8")
    targets = re.findall(r"^\.\. auto\w+:: meshcombine\.(\w+)", index, flags=re.MULTILINE)
    assert targets
    for name in targets:
        assert name in meshcombine.__all__, name


def test_conf_only_uses_bundled_sphinx_extensions():
    conf = (DOCS_DIR / "conf.py").read_text(encoding="utf-8")
    extensions = re.findall(r'^\s+"([\w.]+)",', conf, flags=re.MULTILINE)
    assert extensions
    assert all(ext.startswith("sphinx.ext.") for ext in extensions)
    assert "html_theme" not in conf
