"""CSS syntax: input preprocessing, tokenization, and parsing of stylesheets and declaration lists into concrete syntax trees, per http://drafts.csswg.org/css-syntax/."""
