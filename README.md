# fcitxbus

Building blocks for clients of the Fcitx 5 input method daemon: the
structures it exchanges over D-Bus, and the text and capability logic an
input method front end needs.

## Modules

- `fcitxbus.types` – dataclasses for the structures Fcitx sends or receives:
  `FormattedPreedit`, `StringKeyValue`, `InputMethodEntry`,
  `FullInputMethodEntry`, `VariantInfo`, `LayoutInfo`, `ConfigOption`,
  `ConfigType`, `AddonInfo`, `AddonInfoV2` and `AddonState`, plus `Variant`
  for D-Bus variants. Each structure derives from `DBusStruct`, converts to
  its plain-tuple wire form with `to_dbus()` and back with
  `from_dbus(value)`, which checks member count and member types.
  `list_to_dbus(items)` and `list_from_dbus(cls, values)` convert lists.
  `register_dbus_types()` returns a mapping from each type name (and its
  `...List` form) to its D-Bus signature.
- `fcitxbus.textutil` – `get_boolean_env`, `get_locale` (LC_ALL, then
  LC_CTYPE, then LANG, else `"C"`), `check_utf8`, and the position
  conversions between UTF-16 units, code points and UTF-8 bytes:
  `surrounding_position`, `delete_surrounding_range`,
  `preedit_cursor_position`. Surrounding text of `SURROUNDING_THRESHOLD`
  (4096) UTF-16 units or more is rejected.
- `fcitxbus.imcontext` – `ICData`, the per-widget state (capability mask,
  proxy, cursor rectangle, last surrounding text), whose `add_capability` and
  `remove_capability` call `proxy.set_capability(mask)` when the mask changes
  (or when forced) and the proxy reports `is_valid()`; `compose_preedit`,
  which joins formatted preedit pieces into display text, commit text,
  cursor and segments; and `mouse_action`, which maps a released button to
  the action number for `InvokeAction`.
- `fcitxbus.plugin` – the module keys and their metadata: `keys`,
  `is_fcitx`, `description`, `languages`, `display_name`.

## Example

```python
from fcitxbus.types import FormattedPreedit, StringKeyValue, list_to_dbus
from fcitxbus.imcontext import compose_preedit
from fcitxbus.textutil import surrounding_position

list_to_dbus([StringKeyValue("program", "editor")])
# [('program', 'editor')]

composed = compose_preedit(
    [FormattedPreedit("ni", 0), FormattedPreedit("hao", 16)],
    cursor_pos=2,
    dont_commit=16,
)
composed.text, composed.commit_text, composed.cursor
# ('nihao', 'ni', 2)

surrounding_position("a\U0001F600b", 3)
# (2, 2)  -- UTF-16 cursor 3 is after the emoji, i.e. code point 2
```

## What this package does not do

It has no bus transport and makes no D-Bus calls. It does not watch the bus
for the Fcitx service, create or destroy input contexts, wrap the input
context or controller interfaces, or handle key events and compose
sequences. Bring your own D-Bus library for that and use these types and
helpers to build and read its messages.

## Running the tests

```
pip install -e .[test]
pytest
```