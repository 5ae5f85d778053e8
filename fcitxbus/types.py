"""Value types exchanged with the input method service over D-Bus.

Every structure converts to and from the plain-tuple form used on the wire
(``to_dbus`` / ``from_dbus``). Field order matches the D-Bus signature.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Callable, ClassVar, Iterable, NamedTuple, Sequence, TypeVar

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


class _Codec(NamedTuple):
    signature: str
    encode: Callable[[Any], Any]
    decode: Callable[[Any], Any]


@dataclass(frozen=True)
class Variant:
    """A D-Bus variant: a value tagged with its signature."""

    signature: str = ""
    value: Any = None

    def to_dbus(self) -> tuple[str, Any]:
        return (self.signature, self.value)

    @classmethod
    def from_dbus(cls, value: Any) -> "Variant":
        if isinstance(value, Variant):
            return value
        if not isinstance(value, (tuple, list)) or len(value) != 2:
            raise ValueError("variant must be a (signature, value) pair")
        signature, inner = value
        if not isinstance(signature, str):
            raise TypeError("variant signature must be a string")
        return cls(signature, inner)


def _expect_str(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"expected a string, got {type(value).__name__}")
    return value


def _expect_int32(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected an integer, got {type(value).__name__}")
    if not _INT32_MIN <= value <= _INT32_MAX:
        raise ValueError(f"integer {value} does not fit in 32 bits")
    return value


def _expect_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return bool(value)
    raise TypeError(f"expected a boolean, got {type(value).__name__}")


def _expect_str_list(value: Any) -> list[str]:
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        raise TypeError("expected a list of strings")
    return [_expect_str(item) for item in value]


def _expect_var_dict(value: Any) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise TypeError("expected a mapping of string to variant")
    return {_expect_str(key): item for key, item in value.items()}


_STRING = _Codec("s", _expect_str, _expect_str)
_INT32 = _Codec("i", _expect_int32, _expect_int32)
_BOOL = _Codec("b", _expect_bool, _expect_bool)
_STRING_LIST = _Codec("as", _expect_str_list, _expect_str_list)
_VARIANT_MAP = _Codec("a{sv}", _expect_var_dict, _expect_var_dict)


def _encode_variant(value: Any) -> tuple[str, Any]:
    if not isinstance(value, Variant):
        raise TypeError("expected a Variant")
    return value.to_dbus()


_VARIANT = _Codec("v", _encode_variant, Variant.from_dbus)


def _struct_list(cls: type["DBusStruct"]) -> Callable[[], _Codec]:
    # Resolved lazily so signatures of nested structures are computed on use.
    def make() -> _Codec:
        return _Codec(
            "a" + cls.signature(),
            list_to_dbus,
            lambda values: list_from_dbus(cls, values),
        )

    return make


def _str(default: str = "") -> Any:
    return field(default=default, metadata={"codec": _STRING})


def _int() -> Any:
    return field(default=0, metadata={"codec": _INT32})


def _bool() -> Any:
    return field(default=False, metadata={"codec": _BOOL})


def _str_list() -> Any:
    return field(default_factory=list, metadata={"codec": _STRING_LIST})


def _var_map() -> Any:
    return field(default_factory=dict, metadata={"codec": _VARIANT_MAP})


def _nested(cls: type["DBusStruct"]) -> Any:
    return field(default_factory=list, metadata={"codec_factory": _struct_list(cls)})


def _codec_of(f: Any) -> _Codec:
    if "codec" in f.metadata:
        return f.metadata["codec"]
    return f.metadata["codec_factory"]()


S = TypeVar("S", bound="DBusStruct")


class DBusStruct:
    """Base of the structures carried as D-Bus structs."""

    DBUS_NAME: ClassVar[str] = ""

    @classmethod
    def signature(cls) -> str:
        return "(" + "".join(_codec_of(f).signature for f in fields(cls)) + ")"

    def to_dbus(self) -> tuple:
        return tuple(_codec_of(f).encode(getattr(self, f.name)) for f in fields(self))

    @classmethod
    def from_dbus(cls: type[S], value: Any) -> S:
        if isinstance(value, cls):
            return value
        if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
            raise TypeError(f"{cls.__name__} expects a struct sequence")
        struct_fields = fields(cls)
        if len(value) != len(struct_fields):
            raise ValueError(
                f"{cls.__name__} expects {len(struct_fields)} members, got {len(value)}"
            )
        return cls(
            *(_codec_of(f).decode(item) for f, item in zip(struct_fields, value))
        )


@dataclass
class FormattedPreedit(DBusStruct):
    DBUS_NAME: ClassVar[str] = "FcitxQtFormattedPreedit"
    string: str = _str()
    format: int = _int()


@dataclass
class StringKeyValue(DBusStruct):
    DBUS_NAME: ClassVar[str] = "FcitxQtStringKeyValue"
    key: str = _str()
    value: str = _str()


@dataclass
class InputMethodEntry(DBusStruct):
    DBUS_NAME: ClassVar[str] = "FcitxQtInputMethodEntry"
    unique_name: str = _str()
    name: str = _str()
    native_name: str = _str()
    icon: str = _str()
    label: str = _str()
    language_code: str = _str()
    configurable: bool = _bool()


@dataclass
class FullInputMethodEntry(DBusStruct):
    DBUS_NAME: ClassVar[str] = "FcitxQtFullInputMethodEntry"
    unique_name: str = _str()
    name: str = _str()
    native_name: str = _str()
    icon: str = _str()
    label: str = _str()
    language_code: str = _str()
    addon: str = _str()
    configurable: bool = _bool()
    layout: str = _str()
    properties: dict[str, Any] = _var_map()


@dataclass
class VariantInfo(DBusStruct):
    DBUS_NAME: ClassVar[str] = "FcitxQtVariantInfo"
    variant: str = _str()
    description: str = _str()
    languages: list[str] = _str_list()


@dataclass
class LayoutInfo(DBusStruct):
    DBUS_NAME: ClassVar[str] = "FcitxQtLayoutInfo"
    layout: str = _str()
    description: str = _str()
    languages: list[str] = _str_list()
    variants: list[VariantInfo] = _nested(VariantInfo)


@dataclass
class ConfigOption(DBusStruct):
    DBUS_NAME: ClassVar[str] = "FcitxQtConfigOption"
    name: str = _str()
    type: str = _str()
    description: str = _str()
    default_value: Variant = field(
        default_factory=Variant, metadata={"codec": _VARIANT}
    )
    properties: dict[str, Any] = _var_map()


@dataclass
class ConfigType(DBusStruct):
    DBUS_NAME: ClassVar[str] = "FcitxQtConfigType"
    name: str = _str()
    options: list[ConfigOption] = _nested(ConfigOption)


@dataclass
class AddonInfo(DBusStruct):
    DBUS_NAME: ClassVar[str] = "FcitxQtAddonInfo"
    unique_name: str = _str()
    name: str = _str()
    comment: str = _str()
    category: int = _int()
    configurable: bool = _bool()
    enabled: bool = _bool()


@dataclass
class AddonInfoV2(DBusStruct):
    DBUS_NAME: ClassVar[str] = "FcitxQtAddonInfoV2"
    unique_name: str = _str()
    name: str = _str()
    comment: str = _str()
    category: int = _int()
    configurable: bool = _bool()
    enabled: bool = _bool()
    on_demand: bool = _bool()
    dependencies: list[str] = _str_list()
    optional_dependencies: list[str] = _str_list()


@dataclass
class AddonState(DBusStruct):
    DBUS_NAME: ClassVar[str] = "FcitxQtAddonState"
    unique_name: str = _str()
    enabled: bool = _bool()


_STRUCT_TYPES: tuple[type[DBusStruct], ...] = (
    FormattedPreedit,
    StringKeyValue,
    InputMethodEntry,
    FullInputMethodEntry,
    LayoutInfo,
    VariantInfo,
    ConfigOption,
    ConfigType,
    AddonInfo,
    AddonState,
    AddonInfoV2,
)

_REGISTRY: dict[str, str] = {}


def register_dbus_types() -> dict[str, str]:
    """Register every structure and its list form; return name -> signature."""
    for cls in _STRUCT_TYPES:
        signature = cls.signature()
        _REGISTRY[cls.DBUS_NAME] = signature
        _REGISTRY[cls.DBUS_NAME + "List"] = "a" + signature
    return dict(_REGISTRY)


def list_to_dbus(items: Iterable[DBusStruct]) -> list[tuple]:
    """Convert structures to their wire form."""
    result = []
    for item in items:
        if not isinstance(item, DBusStruct):
            raise TypeError(f"expected a D-Bus structure, got {type(item).__name__}")
        result.append(item.to_dbus())
    return result


def list_from_dbus(cls: type[S], values: Iterable[Any]) -> list[S]:
    """Build a list of ``cls`` from wire-form structs."""
    if isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
        raise TypeError("expected a list of structs")
    return [cls.from_dbus(value) for value in values]