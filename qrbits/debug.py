from contextlib import contextmanager


class Debug:
    """
    Process-wide trace output, silent unless enabled.
    """

    isEnabled = False
    indentNum = 0
    prefix = "[qrbits] "

    @classmethod
    def enable(cls, debug=True):
        cls.isEnabled = debug

    @classmethod
    def reset(cls):
        cls.isEnabled = False
        cls.indentNum = 0

    @classmethod
    def log(cls, message, end="\n"):
        if not cls.isEnabled:
            return
        if end != "\n":
            # continuation of the current line, no prefix or indent
            print(message, end=end)
        else:
            print(cls.prefix + cls.indentNum * "  " + message)

    @classmethod
    def increment_indent(cls, num=1):
        cls.indentNum = max(0, cls.indentNum + num)

    @classmethod
    @contextmanager
    def section(cls, title):
        cls.log(title)
        cls.increment_indent()
        try:
            yield
        finally:
            cls.increment_indent(-1)
