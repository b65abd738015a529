"""
Common exceptions.
"""


class DiceException(Exception):
    """
    All project exceptions subclass this.
    """
    def __init__(self, msg=None, lvl='info'):
        super().__init__(msg)
        self.log_level = lvl


class UserException(DiceException):
    """
    Exception occurred usually due to user error.

    Not unexpected but can indicate a problem.
    """


class ArgumentParseError(UserException):
    """ Error raised on failure to parse arguments. """


class ArgumentHelpError(UserException):
    """ Error raised on request to print help for command. """


class InvalidNotation(UserException):
    """
    The dice notation could not be turned into a roll.

    Attributes:
        field: The marker of the offending field ('count' for the leading dice count).
        notation: The cleaned notation text that was rejected.
    """
    def __init__(self, msg, *, field=None, notation=None):
        super().__init__(msg)
        self.field = field
        self.notation = notation

    @property
    def kind(self):
        """ The kind of failure, one per subclass. """
        return self.__class__.__name__


class MalformedNotation(InvalidNotation):
    """ A required marker is missing or a field is not an integer. """


class ConflictingOptions(InvalidNotation):
    """ Options that exclude each other were both given. """


class DependentOptionMissing(InvalidNotation):
    """ An option was given without the option it depends on. """


class OutOfRangeOption(InvalidNotation):
    """ A field parsed but its value is impossible for the roll. """


class InternalException(DiceException):
    """
    An internal exception that went uncaught.

    Indicates a severe problem.
    """
    def __init__(self, msg, lvl='exception'):
        super().__init__(msg, lvl)


class RandomSourceFailure(InternalException):
    """
    The random source could not produce a value.
    """


def log_format(*, content, args):
    """ Log useful information about the invocation. """
    msg = "roll invoked with notation '{}'".format(content)
    msg += "\n    Arguments: " + ' '.join(args)

    return msg


def write_log(exc, log, *, lvl='info', content, args):
    """
    Log all relevant message about this invocation.
    """
    log_func = getattr(log, getattr(exc, 'log_level', lvl))
    header = '\n{}\n{}\n'.format(exc.__class__.__name__ + ': ' + str(exc), '=' * 20)
    log_func(header + log_format(content=content, args=args))
