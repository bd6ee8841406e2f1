"""Typed snapshots of the interactive controls found in a document.

Every control the engine can write to is represented by one small frozen
dataclass per control kind.  Each kind carries the opaque ``handle`` the
document layer needs to write back to it, the :class:`ControlView` used for
matching, and only the extra data its write strategy needs (radio group and
value, select options).  Controls are snapshots: they are rebuilt from the live
document every time it is scanned and are never cached.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal, Mapping, Optional, Tuple, Union

CONTROL_SELECTOR = 'input, select, textarea, [contenteditable="true"]'
"""CSS selector that targets every control the filler may write to."""

ControlKind = Literal["text", "contenteditable", "checkbox", "radio", "select", "file"]

DESCRIBE_CONTROL_SCRIPT = """
(el) => {
    let label = "";
    if (el.labels && el.labels.length) {
        label = Array.from(el.labels)
            .map(node => (node.textContent || "").trim())
            .filter(Boolean)
            .join(" ");
    }
    if (!label && el.id) {
        const node = document.querySelector(`label[for="${CSS.escape(el.id)}"]`);
        if (node) {
            label = (node.textContent || "").trim();
        }
    }

    const tag = (el.tagName || "").toLowerCase();
    const type = (el.type || "").toLowerCase();
    const options = tag === "select"
        ? Array.from(el.options).map(option => ({value: option.value, text: option.text}))
        : [];

    return {
        tag,
        type,
        editable: el.hasAttribute("contenteditable"),
        id: el.id || "",
        name: el.getAttribute("name") || "",
        className: typeof el.className === "string" ? el.className : "",
        placeholder: el.getAttribute("placeholder") || "",
        label,
        ariaLabel: el.getAttribute("aria-label") || "",
        testId: el.getAttribute("data-testid") || "",
        value: typeof el.value === "string" ? el.value : "",
        options,
    };
}
"""
"""In-page script returning the descriptor consumed by :func:`control_from_descriptor`."""


def _fold(value: Any) -> str:
    if value is None:
        return ""
    return str(value).lower()


@dataclass(frozen=True, slots=True)
class ControlView:
    """Matchable surface of a control.

    Every attribute is case-folded; only the label text is trimmed.
    """

    element_id: str = ""
    name: str = ""
    class_name: str = ""
    placeholder: str = ""
    label: str = ""
    aria_label: str = ""
    test_id: str = ""

    @classmethod
    def from_descriptor(cls, descriptor: Mapping[str, Any]) -> "ControlView":
        return cls(
            element_id=_fold(descriptor.get("id")),
            name=_fold(descriptor.get("name")),
            class_name=_fold(descriptor.get("className")),
            placeholder=_fold(descriptor.get("placeholder")),
            label=_fold(descriptor.get("label")).strip(),
            aria_label=_fold(descriptor.get("ariaLabel")),
            test_id=_fold(descriptor.get("testId")),
        )

    def attributes(self) -> Tuple[str, ...]:
        """Return every textual attribute in a fixed order (id first, test id last)."""

        return (
            self.element_id,
            self.name,
            self.class_name,
            self.placeholder,
            self.label,
            self.aria_label,
            self.test_id,
        )

    def matchable_attributes(self) -> Tuple[str, ...]:
        return tuple(value for value in self.attributes() if value)


@dataclass(frozen=True, slots=True)
class SelectOption:
    value: str
    text: str


@dataclass(frozen=True, slots=True)
class TextControl:
    """Text-like control written through its ``value`` property."""

    handle: Any
    view: ControlView
    kind: ControlKind = "text"


@dataclass(frozen=True, slots=True)
class ContentEditableControl:
    """Free-text editable region written through its text content."""

    handle: Any
    view: ControlView
    kind: ControlKind = "contenteditable"


@dataclass(frozen=True, slots=True)
class CheckboxControl:
    handle: Any
    view: ControlView
    kind: ControlKind = "checkbox"


@dataclass(frozen=True, slots=True)
class RadioControl:
    """One radio button; ``group`` is its raw ``name`` attribute."""

    handle: Any
    view: ControlView
    value: str = ""
    group: str = ""
    kind: ControlKind = "radio"


@dataclass(frozen=True, slots=True)
class SelectControl:
    handle: Any
    view: ControlView
    options: Tuple[SelectOption, ...] = ()
    kind: ControlKind = "select"


@dataclass(frozen=True, slots=True)
class FileControl:
    handle: Any
    view: ControlView
    kind: ControlKind = "file"


Control = Union[
    TextControl,
    ContentEditableControl,
    CheckboxControl,
    RadioControl,
    SelectControl,
    FileControl,
]


def _parse_options(raw: Any) -> Tuple[SelectOption, ...]:
    if not isinstance(raw, (list, tuple)):
        return ()
    options = []
    for entry in raw:
        if not isinstance(entry, Mapping):
            continue
        options.append(
            SelectOption(
                value=str(entry.get("value") or ""),
                text=str(entry.get("text") or ""),
            )
        )
    return tuple(options)


_KINDS_BY_TYPE: Dict[str, ControlKind] = {
    "radio": "radio",
    "checkbox": "checkbox",
    "select-one": "select",
    "file": "file",
}


def control_kind(input_type: str, editable: bool = False) -> ControlKind:
    """Classify a control from its DOM ``type`` and ``contenteditable`` attribute.

    The ``type`` decides first; any other element carrying ``contenteditable``
    (including an ``<input>`` or ``<textarea>``) is written through its text
    content, everything else through its ``value``.
    """

    kind = _KINDS_BY_TYPE.get(input_type.lower())
    if kind is not None:
        return kind
    return "contenteditable" if editable else "text"


def control_from_descriptor(handle: Any, descriptor: Mapping[str, Any]) -> Control:
    """Build the typed control for a descriptor produced by ``DESCRIBE_CONTROL_SCRIPT``.

    A descriptor may name its ``kind`` directly; otherwise it is derived from
    ``type`` and ``editable``.  Unknown kinds are treated as text-like controls,
    which mirrors how the browser itself treats unrecognised input types.
    """

    view = ControlView.from_descriptor(descriptor)
    kind = str(
        descriptor.get("kind")
        or control_kind(str(descriptor.get("type") or ""), bool(descriptor.get("editable")))
    )

    if kind == "radio":
        return RadioControl(
            handle=handle,
            view=view,
            value=str(descriptor.get("value") or ""),
            group=str(descriptor.get("name") or ""),
        )
    if kind == "checkbox":
        return CheckboxControl(handle=handle, view=view)
    if kind == "select":
        return SelectControl(handle=handle, view=view, options=_parse_options(descriptor.get("options")))
    if kind == "file":
        return FileControl(handle=handle, view=view)
    if kind == "contenteditable":
        return ContentEditableControl(handle=handle, view=view)
    return TextControl(handle=handle, view=view)


def describe_control(control: Control) -> Dict[str, Optional[str]]:
    """Return a printable summary of a control, used by diagnostics."""

    view = control.view
    return {
        "kind": control.kind,
        "id": view.element_id or None,
        "name": view.name or None,
        "label": view.label or None,
        "placeholder": view.placeholder or None,
    }


__all__ = [
    "CONTROL_SELECTOR",
    "DESCRIBE_CONTROL_SCRIPT",
    "CheckboxControl",
    "ContentEditableControl",
    "Control",
    "ControlKind",
    "ControlView",
    "FileControl",
    "RadioControl",
    "SelectControl",
    "SelectOption",
    "TextControl",
    "control_from_descriptor",
    "control_kind",
    "describe_control",
]
