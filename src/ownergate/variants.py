from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from pathlib import Path

# for parsing variant files that may contain comments
import json5

from ownergate.exceptions import VariantConfigError
from ownergate.gate import UNKNOWN_SUBMIT_MESSAGE

logger: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GateVariant:
    """Everything that differs between the module-owner and file-owner gates."""

    name: str
    endpoint_suffix: str
    approved_text: str
    denied_text: str
    approved_color: str
    denied_color: str
    label_prefix: str = ""
    hide_submit_control: bool = False
    unknown_text: str = UNKNOWN_SUBMIT_MESSAGE


MODULE_OWNER_VARIANT = GateVariant(
    name="moduleowner",
    endpoint_suffix="moduleowner",
    approved_text="You are a module owner for this change",
    denied_text="You are not a module owner for this change",
    approved_color="#060",
    denied_color="#d14836",
    # wired up but switched off for this deployment
    hide_submit_control=False,
)

FILE_OWNER_VARIANT = GateVariant(
    name="file-owner",
    endpoint_suffix="file-owner",
    approved_text="You are a module owner",
    denied_text="You are not a module owner. Please do not +2 or Submit.",
    approved_color="green",
    denied_color="red",
    label_prefix="<hr />",
    hide_submit_control=True,
)

VARIANTS: dict[str, GateVariant] = {
    MODULE_OWNER_VARIANT.name: MODULE_OWNER_VARIANT,
    FILE_OWNER_VARIANT.name: FILE_OWNER_VARIANT,
}


def get_variant(name: str) -> GateVariant:
    try:
        return VARIANTS[name]
    except KeyError:
        known = ", ".join(sorted(VARIANTS))
        raise VariantConfigError(
            f"Unknown gate variant '{name}' (known: {known})"
        ) from None


def load_variant(path: Path | str) -> GateVariant:
    """Load a variant from a JSON5 file.

    The file names a built-in ``base`` variant and overrides any of its
    fields, e.g. ``{base: "file-owner", hide_submit_control: false}``.
    """
    config_path = Path(path)
    if not config_path.is_file():
        raise VariantConfigError(f"Variant config {config_path} not found")

    try:
        data = json5.loads(config_path.read_text(encoding="utf-8"))
    except ValueError as exc:
        raise VariantConfigError(f"Cannot parse {config_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise VariantConfigError(f"{config_path} must contain an object")

    overrides = dict(data)
    base = get_variant(str(overrides.pop("base", MODULE_OWNER_VARIANT.name)))

    fields = {field.name for field in dataclasses.fields(GateVariant)}
    unknown = sorted(set(overrides) - fields)
    if unknown:
        raise VariantConfigError(
            f"Unknown variant option(s) in {config_path}: {', '.join(unknown)}"
        )
    if "hide_submit_control" in overrides and not isinstance(
        overrides["hide_submit_control"], bool
    ):
        raise VariantConfigError("hide_submit_control must be true or false")
    not_strings = sorted(
        key
        for key, value in overrides.items()
        if key != "hide_submit_control" and not isinstance(value, str)
    )
    if not_strings:
        raise VariantConfigError(
            f"Variant option(s) in {config_path} must be strings: "
            f"{', '.join(not_strings)}"
        )

    variant = dataclasses.replace(base, **overrides)
    logger.debug(f"Loaded variant {variant.name} from {config_path}")
    return variant
