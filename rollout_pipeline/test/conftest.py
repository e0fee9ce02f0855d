import pytest
import yaml


@pytest.fixture
def shell_document():
    """Minimal pipeline document with a single shell step."""
    return {
        "serviceGroup": "test",
        "rolloutName": "test",
        "resourceGroups": [
            {
                "name": "rg",
                "subscription": "sub",
                "aksCluster": "aks",
                "steps": [
                    {
                        "name": "step",
                        "action": "Shell",
                        "command": "echo hello",
                    },
                ],
            },
        ],
    }


@pytest.fixture
def to_yaml():
    def _dump(document) -> bytes:
        return yaml.safe_dump(document, sort_keys=False).encode("utf-8")
    return _dump
