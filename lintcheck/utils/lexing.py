from lintcheck.dialects import Dialect


def mask_literals(text: str, dialect: Dialect, *, comments: bool = True) -> str:
    """Blank out string literals, and comments unless ``comments`` is False.

    Every offset stays in place and line breaks survive masking, so line
    numbers computed on the masked text hold for the original one. A
    single-quoted literal ends at the end of its line when left unterminated.
    """
    masked = list(text)
    length = len(text)
    index = 0

    def blank(start: int, end: int) -> None:
        for position in range(start, end):
            if masked[position] not in "\r\n":
                masked[position] = " "

    while index < length:
        if text.startswith(dialect.line_comment, index):
            end = text.find("\n", index)
            end = length if end == -1 else end
            if comments:
                blank(index, end)
            index = end
        elif dialect.block_comment is not None and text.startswith(dialect.block_comment[0], index):
            opening, closing = dialect.block_comment
            end = text.find(closing, index + len(opening))
            end = length if end == -1 else end + len(closing)
            if comments:
                blank(index, end)
            index = end
        elif text[index] in dialect.string_quotes:
            quote = text[index] * 3 if text.startswith(text[index] * 3, index) else text[index]
            end = index + len(quote)
            while end < length and not text.startswith(quote, end):
                if len(quote) == 1 and text[end] in "\r\n":
                    break
                end += 2 if text[end] == "\\" else 1
            if text.startswith(quote, end):
                end += len(quote)
            end = min(end, length)
            blank(index, end)
            index = end
        else:
            index += 1
    return "".join(masked)
