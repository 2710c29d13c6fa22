# =============================================================
#  scoped_config_manager/widgets.py
# =============================================================
"""Minimal UI-control toolkit the resolver mirrors values into.

Only two widget kinds can be bound to a setting: a checkbox and a
single-select list. Any other :class:`Widget` registered under a bound id
makes the write fail with :class:`UnsupportedControlError`.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence

from .errors import MissingControlError, UnsupportedControlError

__all__ = [
    "Widget",
    "CheckboxWidget",
    "SelectWidget",
    "TextWidget",
    "WidgetToolkit",
    "write_widget",
]

log = logging.getLogger(__name__)

WidgetListener = Callable[[str, Any], None]


class Widget:
    """Base widget. ``user_change`` simulates an edit made by the user."""

    kind = "widget"

    def __init__(self, widget_id: str):
        self.widget_id = widget_id
        self._listeners: List[WidgetListener] = []

    @property
    def value(self) -> Any:
        raise NotImplementedError

    def connect(self, listener: WidgetListener) -> None:
        self._listeners.append(listener)

    def user_change(self, value: Any) -> None:
        self._apply(value)
        for listener in list(self._listeners):
            listener(self.widget_id, self.value)

    def _apply(self, value: Any) -> None:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.widget_id!r}, value={self.value!r})"


class CheckboxWidget(Widget):
    kind = "checkbox"

    def __init__(self, widget_id: str, checked: bool = False):
        super().__init__(widget_id)
        self.checked = bool(checked)

    @property
    def value(self) -> bool:
        return self.checked

    def set_checked(self, value: Any) -> None:
        self.checked = bool(value)

    _apply = set_checked


class SelectWidget(Widget):
    kind = "select"

    def __init__(self, widget_id: str, options: Optional[Sequence[Any]] = None, value: Any = None):
        super().__init__(widget_id)
        self.options = list(options or [])
        self._value = value

    @property
    def value(self) -> Any:
        return self._value

    @value.setter
    def value(self, new: Any) -> None:
        self._value = new

    def _apply(self, value: Any) -> None:
        self._value = value


class TextWidget(Widget):
    """Free-text input. Not bindable to a setting."""

    kind = "text"

    def __init__(self, widget_id: str, text: str = ""):
        super().__init__(widget_id)
        self.text = text

    @property
    def value(self) -> str:
        return self.text

    def _apply(self, value: Any) -> None:
        self.text = "" if value is None else str(value)


class WidgetToolkit:
    """Registry of live widgets, looked up by id."""

    def __init__(self, widgets: Optional[Sequence[Widget]] = None):
        self._widgets: Dict[str, Widget] = {}
        for widget in widgets or ():
            self.add(widget)

    def add(self, widget: Widget) -> Widget:
        self._widgets[widget.widget_id] = widget
        return widget

    def find(self, widget_id: str) -> Optional[Widget]:
        return self._widgets.get(widget_id)

    def __getitem__(self, widget_id: str) -> Widget:
        return self._widgets[widget_id]

    def __contains__(self, widget_id: object) -> bool:
        return widget_id in self._widgets

    def __iter__(self) -> Iterator[Widget]:
        return iter(self._widgets.values())


def write_widget(toolkit: WidgetToolkit, widget_id: str, setting_name: str, value: Any) -> None:
    """Push ``value`` into the widget bound under ``widget_id``."""
    widget = toolkit.find(widget_id)
    if widget is None:
        raise MissingControlError(widget_id, setting_name)

    if isinstance(widget, CheckboxWidget):
        widget.set_checked(value)
    elif isinstance(widget, SelectWidget):
        widget.value = value
    else:
        raise UnsupportedControlError(widget_id, setting_name, widget.kind)
    log.debug("Widget #%s <- %r (setting %s)", widget_id, value, setting_name)
