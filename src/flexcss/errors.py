"""Errors raised while parsing stylesheets and declarations, and the "contextual" records the stylesheet layer reports them through.

Parsing never fails as a whole. A `ParseError` raised by a value or selector parser is caught at the boundary of the rule or declaration it occurred in, wrapped into a `ContextualError` that says what was being parsed (an at-rule, a property, a selector), and handed to a diagnostics callback before parsing resumes with the next rule or declaration.
"""

from .syntax.preprocessing import Location

from dataclasses import dataclass
from enum import StrEnum

class ParseErrorKind(StrEnum):
    """What went wrong, at the level of the parser that detected it."""
    bad_url = 'bad_url'
    bad_string = 'bad_string'
    unbalanced_close_parenthesis = 'unbalanced_close_parenthesis'
    unbalanced_close_square_bracket = 'unbalanced_close_square_bracket'
    unbalanced_close_curly_bracket = 'unbalanced_close_curly_bracket'
    declaration_value_not_exhausted = 'declaration_value_not_exhausted' # Input remained after the value parsed successfully
    unexpected_dimension = 'unexpected_dimension' # A dimension with a unit not valid where it was found
    unexpected_function = 'unexpected_function'
    unsupported_at_rule = 'unsupported_at_rule'
    selector_error = 'selector_error'
    unknown_property = 'unknown_property'
    missing_dimension = 'missing_dimension' # A non-zero number without a unit where a length was expected
    invalid_keyword = 'invalid_keyword'
    invalid_value = 'invalid_value' # Syntactically fine, but out of the range permitted in context
    function_not_supported = 'function_not_supported' # E.g. `calc()`, which is never evaluated
    unexpected_token = 'unexpected_token'
    end_of_input = 'end_of_input'
    qualified_rule_invalid = 'qualified_rule_invalid'
    unspecified = 'unspecified'

MESSAGES = {
    ParseErrorKind.bad_url: "Bad URL",
    ParseErrorKind.bad_string: "Bad string",
    ParseErrorKind.unbalanced_close_parenthesis: "Unbalanced close parenthesis",
    ParseErrorKind.unbalanced_close_square_bracket: "Unbalanced close square bracket",
    ParseErrorKind.unbalanced_close_curly_bracket: "Unbalanced close curly bracket",
    ParseErrorKind.declaration_value_not_exhausted: "The declaration value was not exhausted",
    ParseErrorKind.unexpected_dimension: "Unexpected dimension",
    ParseErrorKind.unexpected_function: "Unexpected function",
    ParseErrorKind.unsupported_at_rule: "Unsupported @-rule",
    ParseErrorKind.selector_error: "Invalid selector",
    ParseErrorKind.unknown_property: "Unknown property",
    ParseErrorKind.missing_dimension: "A dimension is missing",
    ParseErrorKind.invalid_keyword: "Invalid keyword",
    ParseErrorKind.invalid_value: "Invalid value",
    ParseErrorKind.function_not_supported: "Function not supported",
    ParseErrorKind.unexpected_token: "An unexpected token was found",
    ParseErrorKind.end_of_input: "The end of input was reached unexpectedly",
    ParseErrorKind.qualified_rule_invalid: "The qualified rule is invalid",
    ParseErrorKind.unspecified: "Unspecified error",
}

class ParseError(RuntimeError):
    """A [catch-all] class of errors that occur during parsing.

    :param kind: What went wrong
    :param location: Where in the source text it went wrong, if known
    :param detail: The offending text (a unit, a keyword, a function name, etc.), if any
    """
    kind: ParseErrorKind
    location: Location | None
    detail: str | None
    default_kind = ParseErrorKind.unspecified
    def __init__(self, kind: ParseErrorKind | None = None, *, location: Location | None = None, detail: str | None = None):
        self.kind = kind or self.default_kind
        self.location = location
        self.detail = detail
        super().__init__(str(self))
    def __str__(self) -> str:
        message = MESSAGES[self.kind]
        return f"{message}: {self.detail}" if self.detail else message
    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.kind!r}, location={self.location!r}, detail={self.detail!r})"

class InvalidRuleError(ParseError):
    """See http://drafts.csswg.org/css-syntax/#invalid-rule-error."""
    default_kind = ParseErrorKind.qualified_rule_invalid

class SelectorParseError(ParseError):
    default_kind = ParseErrorKind.selector_error

class UnknownPropertyError(ParseError):
    default_kind = ParseErrorKind.unknown_property

class InvalidValueError(ParseError):
    """Raised by value parsers; `kind` narrows down the reason (a missing dimension, an unsupported function, etc.)."""
    default_kind = ParseErrorKind.invalid_value

class ContextualErrorKind(StrEnum):
    unsupported_at_rule = 'unsupported_at_rule'
    invalid_at_rule = 'invalid_at_rule'
    unsupported_property = 'unsupported_property'
    invalid_value = 'invalid_value'
    invalid_selector = 'invalid_selector'

@dataclass(frozen=True, slots=True)
class ContextualError:
    """A parse error in context of the rule or declaration it cost.

    :param kind: What was being parsed
    :param css: The CSS text of the offending at-rule name, property name, selector list or declaration
    :param error: The underlying error, carrying the location
    """
    kind: ContextualErrorKind
    css: str
    error: ParseError
    def __str__(self) -> str:
        match self.kind:
            case ContextualErrorKind.unsupported_at_rule:
                return f"Unsupported/unrecognised @-rule ({self.css}), {self.error}"
            case ContextualErrorKind.invalid_at_rule:
                return f"Invalid @-rule ({self.css}), {self.error}"
            case ContextualErrorKind.unsupported_property:
                return f"Unsupported/unrecognised property name ({self.css}), {self.error}"
            case ContextualErrorKind.invalid_value:
                return f"The value of a property is invalid: {self.error}"
            case ContextualErrorKind.invalid_selector:
                return f"Invalid selector ({self.css}), {self.error}"
    @property
    def location(self) -> Location | None:
        return self.error.location
    def error_string_with_location(self) -> str:
        line, column = self.location or (0, 0)
        return f"Failed to parse css at (line: {line}, col: {column}): {self}"
