# structquery

Filter a list of records with a small SQL-like query language. Records can be
dataclasses, named tuples, ordinary objects (their public attributes) or
mappings with string keys. Field names and mapping keys are matched without
regard to case. Nested fields are reached with dotted paths. The package has
no external dependencies.

## Installation

```
pip install structquery
```

## Usage

```python
from dataclasses import dataclass, field
from structquery.parser import parse

@dataclass
class Department:
    name: str
    location: str

@dataclass
class Person:
    name: str
    age: int
    is_employed: bool
    skills: list[str] = field(default_factory=list)
    department: Department | None = None

people = [
    Person("Alice", 30, True, ["Go", "Python"], Department("Engineering", "New York")),
    Person("Bob", 25, False, ["Java", "C++"]),
    Person("Charlie", 35, True, ["Go", "Rust"], Department("Engineering", "Seattle")),
]

parse("age > 25 AND is_employed = true", people)   # Alice, Charlie
parse("skills CONTAINS 'Go'", people)              # Alice, Charlie
parse("department IS NULL", people)                # Bob
parse("department.location = 'Seattle'", people)   # Charlie
parse("ANY(skills) = ANY('Rust', 'Java')", people) # Bob, Charlie
parse("NOT (name = 'Alice' OR name = 'Bob')", people)  # Charlie
```

`parse(query, data)` returns a new list with the matching items in their
original order. An empty query returns every item. `None` items are skipped.

## Query language

- Comparisons: `=`, `!=`, `<`, `>`, `<=`, `>=`, `CONTAINS`
- Logic: `AND`, `OR`, `NOT`, with parentheses; `AND` binds tighter than `OR`.
  Empty parentheses `()` never match.
- Null checks: `field IS NULL`, `field IS NOT NULL`. A missing field, `None`,
  `False`, zero, an empty string and an empty list all count as null.
- Lists: `ANY(field) = 'value'` and `ANY(field) = ANY('a', 'b')`
- Strings are written in single quotes; `\'` puts a quote inside a string.
- Numbers may be negative, have decimals, use scientific notation (`7.5e4`)
  or thousands separators (`1,000,000`).
- Humanized values outside quotes are turned into plain numbers before
  parsing: byte sizes such as `10GB` (powers of 1000) or `512MiB` (powers of
  1024), and SI suffixes such as `2.5K` or `3M`.
- Keywords are not case-sensitive.

How values are compared depends on the field's value:

- Strings compare as text; `CONTAINS` is a substring test.
- Booleans support `=` and `!=`; `1`, `t`, `true` (any of `true`, `True`,
  `TRUE`) count as true.
- Integers and floats are compared numerically with the literal.
- A list of strings supports `CONTAINS` (substring of any element), `=` (any
  element equal) and `!=` (no element equal).
- Where a path passes through a list, every element is tried and the
  comparison matches if any value does.

## Errors

All errors derive from `structquery.errors.QueryError`:

- `QuerySyntaxError` for queries that cannot be parsed: unclosed strings,
  unbalanced parentheses, unknown operators, a dangling `AND`/`OR`, or values
  like `25abc`.
- `EvaluationError` when a literal cannot be compared with a field, such as
  `age = 'thirty'` or `age = 30.5` on an integer field. Inside an `OR`, or an
  `AND` over different fields, such a failure counts as no match instead.

`parse` also raises `TypeError` for items that are neither records nor
mappings.

```python
from structquery.errors import QueryError
from structquery.parser import parse

try:
    parse("name = 'Alice", people)
except QueryError as exc:
    print(exc)
```

## Lower-level pieces

- `structquery.lexer.EnhancedLexer` turns query text into `Token`s
  (`structquery.tokens`); `structquery.simple_lexer.Lexer` is a plainer
  variant without comma-grouped or scientific numbers.
- `structquery.parser.Parser` builds an expression tree from a lexer;
  `parse_query()` returns the root expression and `errors` lists what was
  collected. Unlike `parse`, it does not rewrite humanized values.
- Every expression (`structquery.expressions`, `structquery.logic`) has
  `evaluate(item)`.
- `structquery.fields.get_field_values(item, path)` resolves a dotted path.
- `structquery.humanize` offers `parse_bytes`, `parse_humanized_number`,
  `parse_comma_separated_number` and `normalize_humanized_values`.

```python
from structquery.lexer import EnhancedLexer
from structquery.parser import Parser

expression = Parser(EnhancedLexer("age > 30")).parse_query()
expression.evaluate(people[2])  # True
```

## What it does not do

structquery is a library only: it has no command-line tool, and it filters
in-memory data without sorting, projecting or storing anything.