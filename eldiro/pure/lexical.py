"""Lexical primitives for eldiro. Every primitive takes the remaining (unconsumed) input and either returns a tuple of
(extracted, remainder) or raises a Malformed error naming what it expected. Primitives never consume input on failure,
so callers can retry another alternative against the same string.

```
<digits>     ::= [0-9]+              ; ASCII digits only
<ident>      ::= [a-zA-Z] <alnum>*
<whitespace> ::= " "*                ; spaces only, tabs and newlines are not whitespace
```
"""

import string

from eldiro.lang.error import Malformed


def take_while(accept, s):
    """Splits s at the first character that accept rejects. Always succeeds."""
    for idx, char in enumerate(s):
        if not accept(char):
            return s[:idx], s[idx:]
    return s, ""


def take_while1(accept, s, expected):
    """Same as take_while, but at least one character must be accepted."""
    extracted, remainder = take_while(accept, s)
    if not extracted:
        raise Malformed(expected, s)
    return extracted, remainder


def extract_digits(s):
    return take_while1(lambda char: char in string.digits, s, "digits")


def extract_ident(s):
    """Identifiers must start with an ASCII letter, so '123abc' is rejected instead of extracting nothing."""
    if not s or s[0] not in string.ascii_letters:
        raise Malformed("identifier", s)
    return take_while(str.isalnum, s)


def extract_whitespace(s):
    return take_while(lambda char: char == " ", s)


def extract_whitespace1(s):
    return take_while1(lambda char: char == " ", s, "whitespace")


def tag(starting_text, s):
    """Strips starting_text from the front of s and returns the remainder."""
    if not s.startswith(starting_text):
        raise Malformed(starting_text, s)
    return s[len(starting_text):]
