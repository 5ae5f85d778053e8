import pytest

from fcitxbus.types import (
    AddonInfo,
    AddonInfoV2,
    AddonState,
    ConfigOption,
    ConfigType,
    FormattedPreedit,
    FullInputMethodEntry,
    InputMethodEntry,
    LayoutInfo,
    StringKeyValue,
    Variant,
    VariantInfo,
    list_from_dbus,
    list_to_dbus,
    register_dbus_types,
)


def test_formatted_preedit_wire_order():
    preedit = FormattedPreedit("abc", 8)
    assert preedit.to_dbus() == ("abc", 8)


def test_formatted_preedit_equality_uses_string_and_format():
    assert FormattedPreedit("a", 1) == FormattedPreedit("a", 1)
    assert not FormattedPreedit("a", 1) == FormattedPreedit("a", 2)
    assert not FormattedPreedit("a", 1) == FormattedPreedit("b", 1)


def test_string_key_value_round_trip():
    kv = StringKeyValue("program", "editor")
    assert kv.to_dbus() == ("program", "editor")
    assert StringKeyValue.from_dbus(kv.to_dbus()) == kv


def test_defaults_are_empty():
    entry = InputMethodEntry()
    assert entry.to_dbus() == ("", "", "", "", "", "", False)


@pytest.mark.parametrize(
    "value",
    [
        InputMethodEntry("pinyin", "Pinyin", "拼音", "fcitx-pinyin", "拼", "zh_CN", True),
        FullInputMethodEntry(
            "pinyin", "Pinyin", "拼音", "icon", "拼", "zh_CN", "pinyin", True, "us", {"k": 1}
        ),
        VariantInfo("intl", "International", ["en", "fr"]),
        AddonInfo("clipboard", "Clipboard", "comment", 4, True, False),
        AddonInfoV2("cloud", "Cloud", "c", 2, False, True, True, ["a"], ["b", "c"]),
        AddonState("clipboard", True),
    ],
)
def test_round_trip(value):
    assert type(value).from_dbus(value.to_dbus()) == value


def test_layout_info_nested_variants():
    layout = LayoutInfo(
        "us", "English", ["en"], [VariantInfo("dvorak", "Dvorak", ["en"])]
    )
    wire = layout.to_dbus()
    assert wire[3] == [("dvorak", "Dvorak", ["en"])]
    assert LayoutInfo.from_dbus(wire) == layout


def test_config_type_nested_options_with_variant():
    option = ConfigOption("Enabled", "Boolean", "desc", Variant("s", "True"), {"x": "y"})
    config = ConfigType("Config", [option])
    wire = config.to_dbus()
    assert wire[1][0][3] == ("s", "True")
    decoded = ConfigType.from_dbus(wire)
    assert decoded == config
    assert decoded.options[0].default_value == Variant("s", "True")


def test_pinned_signatures():
    assert FormattedPreedit.signature() == "(si)"
    assert ConfigOption.signature() == "(sssva{sv})"
    assert LayoutInfo.signature() == "(ssasa(ssas))"


def test_register_dbus_types_lists():
    registry = register_dbus_types()
    for name in (
        "FcitxQtFormattedPreedit",
        "FcitxQtStringKeyValue",
        "FcitxQtInputMethodEntry",
        "FcitxQtFullInputMethodEntry",
        "FcitxQtLayoutInfo",
        "FcitxQtVariantInfo",
        "FcitxQtConfigOption",
        "FcitxQtConfigType",
        "FcitxQtAddonInfo",
        "FcitxQtAddonState",
        "FcitxQtAddonInfoV2",
    ):
        assert registry[name + "List"] == "a" + registry[name]
    assert len(registry) == 22
    assert register_dbus_types() == registry


def test_list_helpers_round_trip():
    items = [StringKeyValue("a", "1"), StringKeyValue("b", "2")]
    wire = list_to_dbus(items)
    assert wire == [("a", "1"), ("b", "2")]
    assert list_from_dbus(StringKeyValue, wire) == items


def test_list_to_dbus_rejects_plain_values():
    with pytest.raises(TypeError):
        list_to_dbus([("a", "b")])


def test_from_dbus_wrong_arity():
    with pytest.raises(ValueError):
        StringKeyValue.from_dbus(("only",))


def test_from_dbus_wrong_member_type():
    with pytest.raises(TypeError):
        FormattedPreedit.from_dbus((1, 2))


def test_int32_overflow_rejected():
    with pytest.raises(ValueError):
        FormattedPreedit("x", 2**31).to_dbus()


def test_variant_from_dbus_requires_pair():
    assert Variant.from_dbus(("i", 3)) == Variant("i", 3)
    with pytest.raises(ValueError):
        Variant.from_dbus(("i",))


def test_bool_accepts_integer_on_decode():
    state = AddonState.from_dbus(("addon", 1))
    assert state.enabled is True


def test_list_from_dbus_rejects_string():
    with pytest.raises(TypeError):
        list_from_dbus(StringKeyValue, "ab")