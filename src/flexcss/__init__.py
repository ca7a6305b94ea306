"""A CSS subset for styling flexbox UI nodes: parsing of stylesheets and inline styles, selector matching against tagged entities, and resolution of the declared values into a style under a given measurement context."""

def _enable_selector_parsing():
    """Augment parsing procedures to enable parsing of CSS selectors.

    This adds on-demand parsing of the prelude part of every qualified rule (see the `prelude` attribute on `QualifiedRule`), when the `selector_list` property is accessed on the latter. Because parsing is only done when the property added with this procedure is accessed, `flexcss.syntax` remains compliant with CSS Syntax. Accessing the property raises `SelectorParseError` for a prelude that is not a supported selector list.
    """
    from .syntax.parsing import QualifiedRule
    from .selectors import SelectorList
    def qualified_rule_selector_list(self):
        return SelectorList.parse(self.prelude)
    setattr(QualifiedRule, "selector_list", property(qualified_rule_selector_list))

_enable_selector_parsing()

from .context import Context
from .errors import ContextualError, ContextualErrorKind, ParseError, ParseErrorKind
from .properties import PropertyDeclaration, PropertyId, parse_declaration
from .selectors import CaseSensitivity, SelectorList, Specificity
from .style import Paint, Style, Val, apply
from .stylesheet import InlineStyle, StyleRule, Stylesheet, parse_inline
from .tag import Identity
