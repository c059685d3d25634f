"""
Unit tests for repository catalogue loading
"""

import pytest
from core.catalogue import load_repositories
from core.exceptions import ConfigError


def write(tmp_path, content):
    path = tmp_path / "repos.yaml"
    path.write_text(content)
    return str(path)


def test_load_valid_catalogue(tmp_path, catalogue_yaml):
    repositories = load_repositories(write(tmp_path, catalogue_yaml))

    assert [r.key for r in repositories] == [
        "navigation_aids__boylat__harbor",
        "navigation_aids__bcnlat__coastal",
    ]
    assert repositories[0].scale == "harbor"
    assert repositories[1].url == "kart@data.koordinates.com:nz/bcnlat-coastal"


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="Failed to read config file"):
        load_repositories(str(tmp_path / "nope.yaml"))


def test_malformed_yaml(tmp_path):
    with pytest.raises(ConfigError, match="Failed to parse YAML"):
        load_repositories(write(tmp_path, "repositories: [unclosed"))


@pytest.mark.parametrize("content", [
    "repositories: []",
    "something_else: 1",
    """
repositories:
  - key: Bad-Key
    name: x
    category: navigation_aids
    scale: harbor
    url: kart@host:x
""",
    """
repositories:
  - key: ok_key
    name: x
    category: navigation_aids
    scale: galactic
    url: kart@host:x
""",
    """
repositories:
  - key: ok_key
    name: ""
    category: navigation_aids
    scale: harbor
    url: kart@host:x
""",
])
def test_invalid_catalogue(tmp_path, content):
    with pytest.raises(ConfigError, match="Invalid config"):
        load_repositories(write(tmp_path, content))


def test_duplicate_keys_rejected(tmp_path):
    content = """
repositories:
  - key: same_key
    name: a
    category: navigation_aids
    scale: harbor
    url: kart@host:a
  - key: same_key
    name: b
    category: navigation_aids
    scale: coastal
    url: kart@host:b
"""
    with pytest.raises(ConfigError, match="Repository keys must be unique"):
        load_repositories(write(tmp_path, content))
