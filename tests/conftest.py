"""Shared fixtures for wren tests.

``make_tree`` writes a template root from a ``{relative_path: source}``
dict so each test states exactly the files it loads.
"""

from collections.abc import Callable
from pathlib import Path

import pytest

type TreeFactory = Callable[[dict[str, str]], Path]

BASE_LAYOUT = """\
<html>
<head><title>{{ title }}</title></head>
<body>
<main>{% block content %}{% end %}</main>
</body>
</html>
"""

MOBILE_LAYOUT = """\
<div class="mobile">{% block content %}{% end %}</div>
"""

ACTIVE_USERS = """\
<ul class="active-users">{% for user in users %}<li>{{ user }}</li>{% end %}</ul>
"""


@pytest.fixture
def make_tree(tmp_path: Path) -> TreeFactory:
    """Return a factory that writes files under a fresh ``templates/`` root."""

    def factory(files: dict[str, str]) -> Path:
        root = tmp_path / "templates"
        root.mkdir(exist_ok=True)
        for relative, source in files.items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(source, encoding="utf-8")
        return root

    return factory


@pytest.fixture
def site_tree(make_tree: TreeFactory) -> Path:
    """A small site: two layouts, one nested include, pages with and without layouts."""
    return make_tree(
        {
            "layouts/base.html": BASE_LAYOUT,
            "layouts/mobilelayout.html": MOBILE_LAYOUT,
            "includes/sidebar/active_users.html": ACTIVE_USERS,
            "includes/footer.html": "<footer>{{ title }} footer</footer>\n",
            "pages/home.html": (
                "{# use base #}\n"
                "{% block content %}<h1>{{ title }}</h1>"
                '{% include "sidebar/active_users" %}{% end %}\n'
            ),
            "pages/mobile/home.html": (
                "{# use mobilelayout #}\n{% block content %}<p>{{ title }}</p>{% end %}\n"
            ),
            "pages/plain.html": '<p>{{ title }}</p>{% include "footer" %}\n',
        }
    )
