"""Tests for gsingress parser."""

import pytest
import yaml

from gsingress.parser import load_gameservers, load_manifests
from gsingress.types import GameServerState


@pytest.fixture
def manifests_content():
    """A GameServer, a Service and a List wrapping another GameServer."""
    return [
        {
            "apiVersion": "agones.dev/v1",
            "kind": "GameServer",
            "metadata": {
                "name": "gs-1",
                "annotations": {"octops.io/gameserver-ingress-domain": "example.com"},
            },
            "status": {"state": "Ready", "ports": [{"name": "default", "port": 7837}]},
        },
        {
            "apiVersion": "v1",
            "kind": "Service",
            "metadata": {"name": "gs-1"},
        },
        {
            "apiVersion": "v1",
            "kind": "List",
            "items": [
                {
                    "apiVersion": "agones.dev/v1",
                    "kind": "GameServer",
                    "metadata": {"name": "gs-2"},
                },
            ],
        },
    ]


@pytest.fixture
def manifests_file(manifests_content, tmp_path):
    path = tmp_path / "gameservers.yaml"
    path.write_text(yaml.dump_all(manifests_content) + "---\n")
    return path


class TestLoadManifests:
    def test_load(self, manifests_file):
        manifests = load_manifests(str(manifests_file))
        assert [m["metadata"]["name"] for m in manifests] == ["gs-1", "gs-1", "gs-2"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_manifests(str(tmp_path / "nope.yaml"))


class TestLoadGameServers:
    def test_load(self, manifests_file):
        gameservers = load_gameservers(str(manifests_file))
        assert [gs.name for gs in gameservers] == ["gs-1", "gs-2"]
        assert gameservers[0].state == GameServerState.READY
        assert gameservers[0].ports[0].port == 7837

    def test_no_gameservers(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_gameservers(str(path)) == []

    def test_list_skips_non_mapping_items(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text(yaml.dump({
            "apiVersion": "v1",
            "kind": "List",
            "items": [
                "oops",
                None,
                42,
                {"apiVersion": "agones.dev/v1", "kind": "GameServer", "metadata": {"name": "gs-1"}},
            ],
        }))
        assert [gs.name for gs in load_gameservers(str(path))] == ["gs-1"]
