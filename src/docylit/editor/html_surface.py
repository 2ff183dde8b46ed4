"""Headless editing surface backed by an lxml fragment tree.

Used wherever no browser canvas exists (tests, scripted edits). The model is
deliberately small: the selection is a piece of visible text, and the cursor
always sits at the end of the document.
"""

from __future__ import annotations

import html
import logging
from collections.abc import Callable

from lxml import html as lxml_html
from lxml.html import HtmlElement

logger = logging.getLogger(__name__)

_BLOCK_TAGS = frozenset({"p", "div", "li", "h1", "h2", "h3", "h4", "h5", "h6", "blockquote", "pre"})
_LIST_TAGS = frozenset({"ol", "ul"})
_INLINE_WRAPPERS = {"bold": "b", "italic": "i", "underline": "u"}
_ALIGNMENTS = {"justifyLeft": "left", "justifyCenter": "center", "justifyRight": "right"}
_LIST_COMMANDS = {"insertOrderedList": "ol", "insertUnorderedList": "ul"}


def _parse(markup: str) -> HtmlElement:
    return lxml_html.fragment_fromstring(markup, create_parent="div")


def _serialize(root: HtmlElement) -> str:
    leading = html.escape(root.text, quote=False) if root.text else ""
    return leading + "".join(lxml_html.tostring(child, encoding="unicode") for child in root)


def _is_element(node: object) -> bool:
    return isinstance(getattr(node, "tag", None), str)


def _inline_text(element: HtmlElement) -> str:
    parts = [element.text or ""]
    for child in element:
        if _is_element(child):
            parts.append("\n" if child.tag == "br" else _inline_text(child))
        parts.append(child.tail or "")
    return "".join(parts)


def _block_lines(element: HtmlElement) -> list[str]:
    if element.tag in _LIST_TAGS:
        return [line for item in element if _is_element(item) for line in _block_lines(item)]
    text = _inline_text(element)
    # A trailing <br> only keeps an empty block open; it adds no visible line.
    return [text.removesuffix("\n")]


def _plain_text(root: HtmlElement) -> str:
    lines: list[str] = []
    loose = [root.text or ""]

    def flush() -> None:
        text = "".join(loose)
        if text.strip():
            lines.append(text)
        loose.clear()

    for child in root:
        if _is_element(child) and (child.tag in _BLOCK_TAGS or child.tag in _LIST_TAGS):
            flush()
            lines.extend(_block_lines(child))
        elif _is_element(child):
            loose.append("\n" if child.tag == "br" else _inline_text(child))
        loose.append(child.tail or "")
    flush()
    return "\n".join(lines)


def _enclosing_block(element: HtmlElement) -> HtmlElement | None:
    node: HtmlElement | None = element
    while node is not None and node.getparent() is not None:
        if node.tag in _BLOCK_TAGS:
            return node
        node = node.getparent()
    return None


def _last_block(root: HtmlElement) -> HtmlElement | None:
    for child in reversed(root):
        if not _is_element(child):
            continue
        if child.tag in _LIST_TAGS:
            items = [item for item in child if _is_element(item)]
            if items:
                return items[-1]
        elif child.tag in _BLOCK_TAGS:
            return child
    return None


def _append_text(block: HtmlElement, text: str) -> None:
    if len(block):
        last = block[-1]
        last.tail = (last.tail or "") + text
    else:
        block.text = (block.text or "") + text


def _drop_placeholder_break(block: HtmlElement) -> None:
    if (
        len(block) == 1
        and block[0].tag == "br"
        and not (block.text or "").strip()
        and not (block[0].tail or "").strip()
    ):
        block.remove(block[0])


class HtmlEditingSurface:
    """In-memory :class:`~docylit.editor.surface.EditingSurface` implementation."""

    def __init__(self, markup: str = "") -> None:
        self._markup = markup
        self._selection: str | None = None
        self._undo: list[str] = []
        self._redo: list[str] = []
        self.focused = False
        self._commands: dict[str, Callable[[HtmlElement, str | None], bool]] = {
            **{name: self._wrapper_for(tag) for name, tag in _INLINE_WRAPPERS.items()},
            **{name: self._aligner_for(align) for name, align in _ALIGNMENTS.items()},
            **{name: self._lister_for(tag) for name, tag in _LIST_COMMANDS.items()},
            "createLink": self._create_link,
        }

    # -- reading ---------------------------------------------------------

    def get_markup(self) -> str:
        return self._markup

    def get_plain_text(self) -> str:
        if not self._markup.strip():
            return ""
        return _plain_text(_parse(self._markup))

    def get_selection_text(self) -> str:
        return self._selection or ""

    # -- writing ---------------------------------------------------------

    def set_markup(self, markup: str) -> None:
        """Replace the whole document; history and selection are reset."""
        self._markup = markup
        self._selection = None
        self._undo.clear()
        self._redo.clear()

    def select(self, text: str) -> bool:
        """Select the first occurrence of ``text`` in the visible text."""
        if not text or text not in self.get_plain_text():
            return False
        self._selection = text
        return True

    def clear_selection(self) -> None:
        self._selection = None

    def focus(self) -> None:
        self.focused = True

    def insert_text_at_cursor(self, text: str) -> None:
        root = _parse(self._markup)
        block = _last_block(root)
        if block is None:
            block = root.makeelement("p", {})
            root.append(block)
        _drop_placeholder_break(block)

        first, *rest = text.split("\n")
        _append_text(block, first)
        for line in rest:
            br = block.makeelement("br", {})
            br.tail = line or None
            block.append(br)

        self._selection = None
        self._commit(root)

    def exec_formatting_command(self, command: str, value: str | None = None) -> bool:
        if command == "undo":
            return self._step(self._undo, self._redo)
        if command == "redo":
            return self._step(self._redo, self._undo)

        handler = self._commands.get(command)
        if handler is None:
            logger.debug("Unsupported formatting command %r ignored", command)
            return False

        root = _parse(self._markup)
        if not handler(root, value):
            return False
        self._commit(root)
        return True

    # -- history ---------------------------------------------------------

    def _commit(self, root: HtmlElement) -> None:
        markup = _serialize(root)
        if markup == self._markup:
            return
        self._undo.append(self._markup)
        self._redo.clear()
        self._markup = markup

    def _step(self, source: list[str], target: list[str]) -> bool:
        if not source:
            return False
        target.append(self._markup)
        self._markup = source.pop()
        self._selection = None
        return True

    # -- command handlers ------------------------------------------------

    def _locate_selection(self, root: HtmlElement) -> tuple[HtmlElement, bool, int] | None:
        """Find the text slot holding the selection as ``(element, in_tail, offset)``."""
        if not self._selection:
            return None
        for element in root.iter():
            if not _is_element(element):
                continue
            if element.text and self._selection in element.text:
                return element, False, element.text.index(self._selection)
            if element is not root and element.tail and self._selection in element.tail:
                return element, True, element.tail.index(self._selection)
        return None

    def _wrap_selection(self, root: HtmlElement, tag: str, attrib: dict[str, str] | None = None) -> bool:
        located = self._locate_selection(root)
        if located is None:
            return False
        element, in_tail, offset = located
        selection = self._selection or ""
        source = (element.tail if in_tail else element.text) or ""
        before, after = source[:offset], source[offset + len(selection) :]

        wrapper = root.makeelement(tag, attrib or {})
        wrapper.text = selection
        wrapper.tail = after or None
        if in_tail:
            element.tail = before or None
            parent = element.getparent()
            parent.insert(parent.index(element) + 1, wrapper)
        else:
            element.text = before or None
            element.insert(0, wrapper)
        return True

    def _target_block(self, root: HtmlElement) -> HtmlElement | None:
        located = self._locate_selection(root)
        if located is not None:
            element, in_tail, _ = located
            container = element.getparent() if in_tail else element
            if container is not None:
                block = _enclosing_block(container)
                if block is not None:
                    return block
        return _last_block(root)

    def _wrapper_for(self, tag: str) -> Callable[[HtmlElement, str | None], bool]:
        def handler(root: HtmlElement, value: str | None) -> bool:
            return self._wrap_selection(root, tag)

        return handler

    def _create_link(self, root: HtmlElement, value: str | None) -> bool:
        if not value:
            return False
        return self._wrap_selection(root, "a", {"href": value})

    def _aligner_for(self, align: str) -> Callable[[HtmlElement, str | None], bool]:
        def handler(root: HtmlElement, value: str | None) -> bool:
            block = self._target_block(root)
            if block is None:
                return False
            declarations = [
                decl.strip()
                for decl in (block.get("style") or "").split(";")
                if decl.strip() and not decl.strip().startswith("text-align")
            ]
            declarations.append(f"text-align: {align}")
            block.set("style", "; ".join(declarations) + ";")
            return True

        return handler

    def _lister_for(self, list_tag: str) -> Callable[[HtmlElement, str | None], bool]:
        def handler(root: HtmlElement, value: str | None) -> bool:
            block = self._target_block(root)
            if block is None:
                return False
            parent = block.getparent()
            if block.tag == "li" and parent is not None and parent.tag in _LIST_TAGS:
                if parent.tag == list_tag:
                    _unwrap_list(parent)
                else:
                    parent.tag = list_tag
                return True

            new_list = root.makeelement(list_tag, {})
            item = root.makeelement("li", {})
            item.text = block.text
            for child in list(block):
                item.append(child)
            new_list.append(item)
            new_list.tail = block.tail
            block.getparent().replace(block, new_list)
            return True

        return handler


def _unwrap_list(list_element: HtmlElement) -> None:
    """Turn every item of ``list_element`` back into a paragraph."""
    parent = list_element.getparent()
    index = parent.index(list_element)
    paragraphs = []
    for item in list_element:
        if not _is_element(item):
            continue
        paragraph = list_element.makeelement("p", {})
        paragraph.text = item.text
        for child in list(item):
            paragraph.append(child)
        paragraphs.append(paragraph)
    if paragraphs:
        paragraphs[-1].tail = list_element.tail
    parent.remove(list_element)
    for offset, paragraph in enumerate(paragraphs):
        parent.insert(index + offset, paragraph)
