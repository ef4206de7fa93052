"""
Tests for AlgodConfig.

Test plan:
- Defaults point at the local sandbox node
- Environment values are read, overrides win over the environment
- Empty token override is kept (public nodes)
- Trailing slash stripped, bad or non-finite timeout rejected
"""

import pytest

from algopay.config import DEFAULT_ALGOD_TOKEN, DEFAULT_ALGOD_URL, AlgodConfig


class TestFromEnv:
    def test_defaults(self) -> None:
        config = AlgodConfig.from_env(environ={})
        assert config.url == DEFAULT_ALGOD_URL
        assert config.token == DEFAULT_ALGOD_TOKEN
        assert config.timeout_s == 30.0

    def test_environment(self) -> None:
        config = AlgodConfig.from_env(
            environ={
                "ALGOD_URL": "https://testnet.node",
                "ALGOD_TOKEN": "secret",
                "ALGOD_TIMEOUT_S": "5",
            }
        )
        assert config == AlgodConfig(url="https://testnet.node", token="secret", timeout_s=5.0)

    def test_overrides_win(self) -> None:
        config = AlgodConfig.from_env(
            {"url": "http://override", "timeout_s": 1.5},
            environ={"ALGOD_URL": "http://env", "ALGOD_TIMEOUT_S": "9"},
        )
        assert config.url == "http://override"
        assert config.timeout_s == 1.5

    def test_empty_token_override_kept(self) -> None:
        config = AlgodConfig.from_env({"token": ""}, environ={"ALGOD_TOKEN": "env"})
        assert config.token == ""

    def test_reads_os_environ(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ALGOD_URL", "http://from-os")
        assert AlgodConfig.from_env().url == "http://from-os"

    def test_bad_timeout(self) -> None:
        with pytest.raises(ValueError, match="ALGOD_TIMEOUT_S"):
            AlgodConfig.from_env(environ={"ALGOD_TIMEOUT_S": "soon"})


class TestValidation:
    def test_trailing_slash_stripped(self) -> None:
        assert AlgodConfig(url="http://node/").url == "http://node"

    def test_non_positive_timeout(self) -> None:
        with pytest.raises(ValueError):
            AlgodConfig(timeout_s=0)

    def test_empty_url(self) -> None:
        with pytest.raises(ValueError):
            AlgodConfig(url="")

    @pytest.mark.parametrize("value", ["nan", "inf", "-inf"])
    def test_non_finite_timeout_from_env(self, value: str) -> None:
        with pytest.raises(ValueError, match="finite"):
            AlgodConfig.from_env(environ={"ALGOD_TIMEOUT_S": value})

    def test_nan_timeout(self) -> None:
        with pytest.raises(ValueError):
            AlgodConfig(timeout_s=float("nan"))
