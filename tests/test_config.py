import pydantic
import pytest

from slagboom.config import ConfigurationError, GateConfig, MainConfig


def test_gate_defaults():
    cfg = GateConfig()
    assert cfg.realm == "Application"
    assert cfg.exempt == frozenset()


@pytest.mark.parametrize(
    "exempt, expected",
    [
        (None, frozenset()),
        ("/allowed_through", frozenset({"/allowed_through"})),
        (["/allowed_through", "/also_allowed"], frozenset({"/allowed_through", "/also_allowed"})),
        (("/a", "/a"), frozenset({"/a"})),
    ],
)
def test_gate_exempt_normalized(exempt, expected):
    assert GateConfig(exempt=exempt).exempt == expected


def test_gate_is_frozen():
    cfg = GateConfig(realm="WallysWorld")
    with pytest.raises(pydantic.ValidationError):
        cfg.realm = "Elsewhere"


def test_main_from_file(tmp_path):
    cfg_file = tmp_path / "config.toml"
    cfg_file.write_text(
        """
[server]
port = 9000

[gate]
realm = "WallysWorld"
exempt = "/_ping"

[accounts]
Boss = "password"
""",
        encoding="utf-8",
    )
    cfg = MainConfig.from_file(cfg_file)
    assert cfg.instance == tmp_path.resolve()
    assert cfg.server.host == "localhost"
    assert cfg.server.port == 9000
    assert cfg.gate.realm == "WallysWorld"
    assert cfg.gate.exempt == frozenset({"/_ping"})
    assert cfg.accounts == {"Boss": "password"}


@pytest.mark.parametrize("content", ["[server\n", '[server]\nport = "many"\n'])
def test_main_from_file_invalid(tmp_path, content):
    cfg_file = tmp_path / "config.toml"
    cfg_file.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigurationError):
        MainConfig.from_file(cfg_file)


def test_main_from_file_missing(tmp_path):
    with pytest.raises(ConfigurationError):
        MainConfig.from_file(tmp_path / "missing.toml")
