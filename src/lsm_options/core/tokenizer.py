"""Options string tokenizer.

Splits ``key=value;key={nested;block};...`` into a flat map. Nested blocks
are returned verbatim (outer braces stripped) for the caller to tokenize
again once it knows the key expects a sub-configuration.
"""

from __future__ import annotations

import logging

from .status import Result
from .types import OptionsMap

logger = logging.getLogger(__name__)

# whitespace as the C locale defines it
C_SPACE = " \t\n\v\f\r"


def trim(text: str) -> str:
    """Strip surrounding whitespace; empty or blank input gives ""."""
    return text.strip(C_SPACE)


def tokenize(opts_str: str) -> Result[OptionsMap]:
    """Parse an options string into a key -> raw value map.

    Example:
        ``write_buffer_size=1024;max_write_buffer_number=2;``
        ``nested_opt={opt1=1;opt2=2};max_bytes_for_level_base=100``

    A later duplicate key overwrites an earlier one. A trailing ``;`` is
    allowed and blank input yields an empty map.
    """
    opts = trim(opts_str)
    opts_map: OptionsMap = {}
    pos = 0
    size = len(opts)

    while pos < size:
        eq_pos = opts.find("=", pos)
        if eq_pos == -1:
            return Result.invalid("Mismatched key value pair, '=' expected")
        key = trim(opts[pos:eq_pos])
        if not key:
            return Result.invalid("Empty key found")

        # skip space after '=' and look for '{' for possible nested options
        pos = eq_pos + 1
        while pos < size and opts[pos] in C_SPACE:
            pos += 1
        if pos >= size:
            opts_map[key] = ""
            break

        if opts[pos] == "{":
            depth = 1
            brace_pos = pos + 1
            while brace_pos < size:
                if opts[brace_pos] == "{":
                    depth += 1
                elif opts[brace_pos] == "}":
                    depth -= 1
                    if depth == 0:
                        break
                brace_pos += 1
            if depth != 0:
                return Result.invalid("Mismatched curly braces for nested options")

            opts_map[key] = trim(opts[pos + 1:brace_pos])
            # only whitespace may sit between the closing brace and ';'
            pos = brace_pos + 1
            while pos < size and opts[pos] in C_SPACE:
                pos += 1
            if pos < size and opts[pos] != ";":
                return Result.invalid("Unexpected chars after nested options")
            pos += 1
        else:
            sc_pos = opts.find(";", pos)
            if sc_pos == -1:
                opts_map[key] = trim(opts[pos:])
                break
            opts_map[key] = trim(opts[pos:sc_pos])
            pos = sc_pos + 1

    logger.debug(f"Tokenized {len(opts_map)} option(s)")
    return Result.success(opts_map)
