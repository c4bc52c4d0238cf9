from __future__ import annotations

import pytest

from aex402.config import (
    CONFIG_ENV_VAR,
    AccountKind,
    ProgramConfig,
    config_from_mapping,
    default_config,
    default_config_path,
    load_config,
)


def _doc(**overrides):
    doc = {
        "program_id_bytes": "11" * 32,
        "accounts": {"pool": "0x504f4f4c53574150", "farm": 42},
        "instructions": {"swap": "82c69e91e17587c8"},
    }
    doc.update(overrides)
    return doc


class TestPackagedProfile:
    def test_program_id(self, cfg) -> None:
        assert len(cfg.program_id) == 32
        assert cfg.program_id.hex().startswith("212da1c2")

    def test_every_kind_tagged(self, cfg) -> None:
        for kind in AccountKind:
            if kind is AccountKind.UNKNOWN:
                continue
            assert cfg.kind_for_tag(cfg.account_tag(kind)) is kind

    def test_instruction_lookup(self, cfg) -> None:
        assert cfg.instruction_tag("swap") == 0x82C69E91E17587C8
        assert cfg.instruction_for_tag(0x82C69E91E17587C8) == "swap"
        assert cfg.instruction_for_tag(0) is None
        with pytest.raises(KeyError):
            cfg.instruction_tag("nope")

    def test_unknown_tag(self, cfg) -> None:
        assert cfg.kind_for_tag(1) is AccountKind.UNKNOWN

    def test_tables_read_only(self, cfg) -> None:
        with pytest.raises(TypeError):
            cfg.account_discriminators[AccountKind.POOL] = 1


class TestFromMapping:
    def test_hex_and_int_values(self) -> None:
        c = config_from_mapping(_doc())
        assert c.account_tag(AccountKind.FARM) == 42
        assert c.instruction_tag("swap") == 0x82C69E91E17587C8
        with pytest.raises(KeyError):
            c.account_tag(AccountKind.NPOOL)

    @pytest.mark.parametrize(
        "overrides",
        [
            {"program_id_bytes": "11" * 31},
            {"program_id_bytes": "zz"},
            {"program_id_bytes": None},
            {"accounts": {"bogus": "0x01"}},
            {"accounts": {"pool": "0x1", "farm": "0x1"}},
            {"accounts": {"pool": "0x" + "1" * 17}},
            {"accounts": {"pool": -1}},
            {"instructions": {"swap": True}},
            {"instructions": ["swap"]},
        ],
    )
    def test_rejects_malformed(self, overrides) -> None:
        with pytest.raises((ValueError, TypeError)):
            config_from_mapping(_doc(**overrides))

    def test_unknown_kind_has_no_tag(self) -> None:
        with pytest.raises(ValueError):
            ProgramConfig(program_id=bytes(32), account_discriminators={AccountKind.UNKNOWN: 1})


class TestLoading:
    def test_load_yaml(self, tmp_path) -> None:
        path = tmp_path / "fork.yaml"
        path.write_text(
            "program_id_bytes: '" + "22" * 32 + "'\n"
            "accounts:\n  pool: '0x0102030405060708'\n"
            "instructions:\n  swap: '0x0a'\n",
            encoding="utf-8",
        )
        c = load_config(path)
        assert c.program_id == b"\x22" * 32
        assert c.account_tag(AccountKind.POOL) == 0x0102030405060708
        assert c.instruction_tag("swap") == 10

    def test_load_rejects_non_mapping(self, tmp_path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("- 1\n- 2\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_config(path)

    def test_env_override(self, tmp_path, monkeypatch) -> None:
        path = tmp_path / "env.yaml"
        path.write_text("program_id_bytes: '" + "33" * 32 + "'\n", encoding="utf-8")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
        default_config.cache_clear()
        try:
            assert default_config_path() == path
            assert default_config().program_id == b"\x33" * 32
        finally:
            monkeypatch.delenv(CONFIG_ENV_VAR)
            default_config.cache_clear()
        assert default_config().program_id != b"\x33" * 32

    def test_default_is_cached(self) -> None:
        assert default_config() is default_config()
