"""日期格式转换工具函数模块.

索引名模板中的日期格式沿用 Elasticsearch/Joda 风格（如 "YYYY.MM.dd"、"xxxx.ww"），
此处将其转换为 datetime.strptime/strftime 可用的格式字符串。
"""

import re

from .exceptions import InvalidDateFormatError

# strptime 中可以与 ISO 周（%G/%V）配合使用的星期指令
_WEEKDAY_DIRECTIVES: tuple[str, ...] = ("%a", "%A", "%w", "%u")

# 逐个匹配 strftime 指令（含 "%%"）
_DIRECTIVE_PATTERN = re.compile(r"%.")


def _letter_directive(pattern: str, letter: str, count: int) -> str:
    """将一组连续相同的 Joda 格式字母转换为 strftime 指令."""
    if letter in ("y", "Y", "u"):
        return "%y" if count == 2 else "%Y"
    if letter == "x":
        return "%G"
    if letter == "w":
        return "%V"
    if letter == "M":
        if count <= 2:
            return "%m"
        return "%b" if count == 3 else "%B"
    if letter == "E":
        return "%a" if count <= 3 else "%A"
    simple = {
        "d": "%d",
        "D": "%j",
        "e": "%u",
        "H": "%H",
        "h": "%I",
        "m": "%M",
        "s": "%S",
        "a": "%p",
        "Z": "%z",
    }
    if letter in simple:
        return simple[letter]
    raise InvalidDateFormatError(
        f"日期格式 {pattern!r} 中包含不支持的格式字符 {letter!r}"
    )


def _translate(pattern: str) -> tuple[str, int]:
    """转换 Joda 格式，同时返回秒小数部分的位数（没有 S 字段时为 6）."""
    result: list[str] = []
    digits = 6
    index = 0
    length = len(pattern)

    while index < length:
        char = pattern[index]

        if char == "'":
            end = index + 1
            literal: list[str] = []
            while True:
                if end >= length:
                    raise InvalidDateFormatError(f"日期格式 {pattern!r} 中单引号未闭合")
                if pattern[end] == "'":
                    if end + 1 < length and pattern[end + 1] == "'":
                        literal.append("'")
                        end += 2
                        continue
                    break
                literal.append(pattern[end])
                end += 1
            # '' 表示单引号本身
            text = "".join(literal) if end > index + 1 else "'"
            result.append(text.replace("%", "%%"))
            index = end + 1
            continue

        if char.isascii() and char.isalpha():
            end = index
            while end < length and pattern[end] == char:
                end += 1
            count = end - index
            if char == "S":
                if count > 6:
                    raise InvalidDateFormatError(
                        f"日期格式 {pattern!r} 中秒的小数部分最多 6 位"
                    )
                digits = count
                result.append("%f")
            else:
                result.append(_letter_directive(pattern, char, count))
            index = end
            continue

        result.append("%%" if char == "%" else char)
        index += 1

    converted = "".join(result)
    if "%V" in converted and "%G" not in converted:
        converted = converted.replace("%Y", "%G")
    return converted, digits


def joda_to_strftime(pattern: str) -> str:
    """将 Joda 风格的日期格式转换为 strftime 格式.

    - 连续相同的字母视为一个字段（如 "YYYY" → "%Y"，"MMM" → "%b"）
    - 秒的小数部分（S、SSS 等）转换为 "%f"，位数见 fraction_digits()
    - 单引号包围的内容为字面量，两个连续单引号表示单引号本身
    - 其他非字母字符原样保留，"%" 转义为 "%%"
    - 只有周数（ww）而没有周年（xxxx）时，年份按 ISO 周年处理

    Args:
        pattern: Joda 风格日期格式，如 "YYYY.MM.dd"

    Returns:
        strftime 格式字符串

    Raises:
        InvalidDateFormatError: 包含不支持的格式字符或单引号未闭合时抛出

    Examples:
        >>> joda_to_strftime("YYYY.MM.dd")
        '%Y.%m.%d'
        >>> joda_to_strftime("xxxx.ww")
        '%G.%V'
        >>> joda_to_strftime("yyyy'W'ww")
        '%GW%V'
    """
    return _translate(pattern)[0]


def fraction_digits(pattern: str) -> int:
    """Joda 风格日期格式中秒的小数部分位数，如 "ss.SSS" 为 3，没有 S 字段时为 6."""
    return _translate(pattern)[1]


def render_fraction(strftime_format: str, microsecond: int, digits: int) -> str:
    """将格式中的 "%f" 替换为截断到指定位数的小数部分，其余指令保持不变."""
    if digits >= 6:
        return strftime_format
    text = f"{microsecond:06d}"[:digits]
    return _DIRECTIVE_PATTERN.sub(
        lambda m: text if m.group(0) == "%f" else m.group(0), strftime_format
    )


def needs_weekday(strftime_format: str) -> bool:
    """ISO 周格式在 strptime 时是否需要补充星期指令."""
    if "%G" not in strftime_format and "%V" not in strftime_format:
        return False
    return not any(directive in strftime_format for directive in _WEEKDAY_DIRECTIVES)
