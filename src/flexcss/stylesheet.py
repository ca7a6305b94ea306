"""Stylesheets and inline styles: parsing of whole CSS texts into rules of typed declarations, and applying those to matching entities.

Parsing a stylesheet never fails. A rule with an invalid selector, or a declaration with an unknown property or an invalid value, is dropped; the failure is reported to the `on_error` callback as a `ContextualError`, and parsing goes on with the next rule or declaration. By default failures are logged as warnings.

Rules apply in document order and declarations in the order written, so a later declaration overrides an earlier one for the same field, whatever the specificity of the selectors involved.
"""

from .context import Context
from .errors import ContextualError, ContextualErrorKind, InvalidRuleError, ParseError, ParseErrorKind, UnknownPropertyError
from .properties import PropertyDeclaration, parse_declaration
from .selectors import CaseSensitivity, SelectorList
from .style import Paint, Style, apply
from .syntax.parsing import AtRule, BadDeclaration, BadRule, ComponentStream, Contents, Declaration, QualifiedRule, location_of, parse_declaration_list, parse_stylesheet, source
from .tag import Identity

import logging
from os import PathLike

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import TypeAlias

logger = logging.getLogger(__name__)

ErrorHandler: TypeAlias = Callable[[ContextualError], None]

def log_error(error: ContextualError) -> None:
    """The default `on_error` callback."""
    logger.warning(error.error_string_with_location())

@dataclass(frozen=True, slots=True)
class StyleRule:
    """A style rule: the declarations apply to entities any of the selectors match.

    `declarations` is one tuple, shared by all of `selectors`.
    """
    selectors: SelectorList
    declarations: tuple[PropertyDeclaration, ...]
    def matches(self, identity: Identity, case_sensitivity: CaseSensitivity = CaseSensitivity.case_sensitive) -> bool:
        return self.selectors.matches(identity, case_sensitivity)

Rule: TypeAlias = StyleRule # The only kind of rule kept; at-rules are dropped

@dataclass(frozen=True, slots=True)
class Stylesheet:
    rules: tuple[Rule, ...]
    location: str | None = None # See http://drafts.csswg.org/cssom-1/#concept-css-style-sheet-location
    @classmethod
    def parse(cls, text: str, *, location: str | None = None, on_error: ErrorHandler = log_error) -> 'Stylesheet':
        """Parse the text of a stylesheet, e.g. `".panel { width: 100%; }"`."""
        return cls(tuple(parse_rules(parse_stylesheet(text, location=location).contents, on_error)), location)
    @classmethod
    def load(cls, path: str | PathLike, *, on_error: ErrorHandler = log_error) -> 'Stylesheet':
        """Read and parse a stylesheet file, conventionally named `*.css`, as UTF-8 text."""
        with open(path, encoding='utf-8') as file:
            return cls.parse(file.read(), location=str(path), on_error=on_error)
    def matching_rules(self, identity: Identity, case_sensitivity: CaseSensitivity = CaseSensitivity.case_sensitive) -> Iterator[Rule]:
        """Yield the rules that apply to `identity`, in document order."""
        return (rule for rule in self.rules if rule.matches(identity, case_sensitivity))
    def declarations_for(self, identity: Identity, case_sensitivity: CaseSensitivity = CaseSensitivity.case_sensitive) -> Iterator[PropertyDeclaration]:
        for rule in self.matching_rules(identity, case_sensitivity):
            yield from rule.declarations
    def apply(self, identity: Identity, context: Context, target: object, case_sensitivity: CaseSensitivity = CaseSensitivity.case_sensitive) -> None:
        """Apply the declarations of every rule matching `identity` to `target`, in order."""
        for declaration in self.declarations_for(identity, case_sensitivity):
            apply(declaration, context, target)

def parse_rules(contents: Contents, on_error: ErrorHandler) -> Iterator[Rule]:
    for rule in contents.rules:
        match rule:
            case AtRule():
                report_at_rule(rule, on_error)
            case BadRule():
                on_error(ContextualError(ContextualErrorKind.invalid_selector, source(rule.prelude).strip(), InvalidRuleError(location=location_of(rule), detail="The block is missing")))
            case QualifiedRule():
                try:
                    selectors = rule.selector_list
                except ParseError as error:
                    on_error(ContextualError(ContextualErrorKind.invalid_selector, source(rule.prelude).strip(), error))
                    continue
                yield StyleRule(selectors, tuple(parse_declarations(rule.block.contents, on_error)))

def report_at_rule(rule: AtRule, on_error: ErrorHandler) -> None:
    """At-rules are recognized, and dropped, whether at the top level or in a block; each is reported once."""
    on_error(ContextualError(ContextualErrorKind.unsupported_at_rule, rule.name, ParseError(ParseErrorKind.unsupported_at_rule, location=location_of(rule), detail=rule.name)))

def parse_declarations(contents: Contents, on_error: ErrorHandler) -> Iterator[PropertyDeclaration]:
    """Yield the declarations in `contents` that parse, in order, reporting the others."""
    for item in contents:
        match item:
            case Declaration():
                try:
                    yield parse_declaration(item.name, ComponentStream(item.value), location=location_of(item))
                except UnknownPropertyError as error:
                    on_error(ContextualError(ContextualErrorKind.unsupported_property, item.name, error))
                except ParseError as error:
                    on_error(ContextualError(ContextualErrorKind.invalid_value, source(item).strip(), error))
            case BadDeclaration():
                on_error(ContextualError(ContextualErrorKind.invalid_value, source(item).strip(), ParseError(ParseErrorKind.unexpected_token, location=location_of(item), detail=source(item).strip())))
            case AtRule():
                report_at_rule(item, on_error)

def parse_inline(text: str, *, on_error: ErrorHandler = log_error) -> tuple[PropertyDeclaration, ...]:
    """Parse a declaration list without a selector or braces, e.g. the `"width: 100%; height: 100px;"` of a `style` attribute."""
    return tuple(parse_declarations(parse_declaration_list(text), on_error))

def apply_all(declarations: Iterable[PropertyDeclaration], context: Context, target: object) -> None:
    for declaration in declarations:
        apply(declaration, context, target)

@dataclass(frozen=True, slots=True)
class InlineStyle:
    """The text of an inline declaration block, to build a fresh `Style` or `Paint` from.

    Nothing is stored but the text; every conversion parses it anew.
    """
    text: str
    def parse(self, *, on_error: ErrorHandler = log_error) -> tuple[PropertyDeclaration, ...]:
        return parse_inline(self.text, on_error=on_error)
    def to_style(self, context: Context = Context(), *, on_error: ErrorHandler = log_error) -> Style:
        style = Style()
        apply_all(self.parse(on_error=on_error), context, style)
        return style
    def to_paint(self, *, on_error: ErrorHandler = log_error) -> Paint:
        paint = Paint()
        apply_all(self.parse(on_error=on_error), Context(), paint)
        return paint
