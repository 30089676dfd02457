from __future__ import annotations

from pathlib import Path

import pytest

from ownergate.exceptions import VariantConfigError
from ownergate.variants import (
    FILE_OWNER_VARIANT,
    MODULE_OWNER_VARIANT,
    get_variant,
    load_variant,
)


def test_builtin_variants_differ_where_deployments_differ() -> None:
    assert MODULE_OWNER_VARIANT.endpoint_suffix == "moduleowner"
    assert FILE_OWNER_VARIANT.endpoint_suffix == "file-owner"
    assert MODULE_OWNER_VARIANT.hide_submit_control is False
    assert FILE_OWNER_VARIANT.hide_submit_control is True
    assert get_variant("file-owner") is FILE_OWNER_VARIANT


def test_get_variant_rejects_unknown_name() -> None:
    with pytest.raises(VariantConfigError, match="moduleowner, file-owner|file-owner, moduleowner"):
        get_variant("owners")


def test_load_variant_accepts_json5_overrides(tmp_path: Path) -> None:
    config = tmp_path / "gate.json5"
    config.write_text(
        """
        {
          // keep the reviewer copy, leave the native submit button alone
          base: "file-owner",
          name: "reviewer-soft",
          hide_submit_control: false,
        }
        """,
        encoding="utf-8",
    )

    variant = load_variant(config)

    assert variant.name == "reviewer-soft"
    assert variant.endpoint_suffix == "file-owner"
    assert variant.denied_color == "red"
    assert variant.hide_submit_control is False


def test_load_variant_defaults_to_module_owner_base(tmp_path: Path) -> None:
    config = tmp_path / "gate.json"
    config.write_text('{"approved_color": "#0a0"}', encoding="utf-8")

    variant = load_variant(str(config))

    assert variant.endpoint_suffix == "moduleowner"
    assert variant.approved_color == "#0a0"


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ("{colour: 'red'}", "colour"),
        ("[1, 2]", "object"),
        ("{hide_submit_control: 'yes'}", "true or false"),
        ("{base: 'nope'}", "nope"),
        ("{not json", "Cannot parse"),
    ],
)
def test_load_variant_rejects_bad_config(
    tmp_path: Path, content: str, message: str
) -> None:
    config = tmp_path / "gate.json5"
    config.write_text(content, encoding="utf-8")

    with pytest.raises(VariantConfigError, match=message):
        load_variant(config)


def test_load_variant_missing_file(tmp_path: Path) -> None:
    with pytest.raises(VariantConfigError, match="not found"):
        load_variant(tmp_path / "missing.json5")


@pytest.mark.parametrize(
    "content", ["{endpoint_suffix: null}", "{approved_text: 5}", "{label_prefix: []}"]
)
def test_load_variant_rejects_non_string_options(tmp_path: Path, content: str) -> None:
    config = tmp_path / "gate.json5"
    config.write_text(content, encoding="utf-8")

    with pytest.raises(VariantConfigError, match="must be strings"):
        load_variant(config)
