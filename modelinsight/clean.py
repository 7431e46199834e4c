import re

from .config import config

# Functions that wrap a variable in model formulas. For smoothers and splines ('s()', 'te()', ...)
# and for functions with more than one argument ('poly(x, 2)') the first argument is kept.
# The order matters, 'as.factor' has to be checked before 'factor' and 'log(log())' before 'log'.
WRAPPERS = (
    "as.factor",
    "factor",
    "offset",
    "log-log",
    "log",
    "lag",
    "diff",
    "pspline",
    "poly",
    "strata",
    "scale",
    "interaction",
    "sqrt",
    "pb",
    "lo",
    "bs",
    "ns",
    "t2",
    "te",
    "ti",
    "tt",
    "mi",
    "mo",
    "gp",
    "s",
    "I",
)

_PATTERNS = {
    # The argument of an offset can be arithmetic on variables, like 'offset(x + y)'
    "offset": re.compile(r"^offset\(([^-+ )]*).*"),
    "log-log": re.compile(r"^log\(log\(([^,)]*)\).*"),
    "I": re.compile(r"^I\((\w*).*"),
}

for _name in WRAPPERS:
    if _name not in _PATTERNS:
        _PATTERNS[_name] = re.compile(r"^" + re.escape(_name) + r"\(([^,)]*).*")

# Group-specific terms keep what comes after the last '|'
_BAR = re.compile(r"^(.*)\|(.*)$")


def clean_name(name, ignore_asis=None):
    """Removes transformations from a single term name.

    Parameters
    ----------
    name: str
        A term name as written in a model formula, like ``"log(x)"``, ``"poly(x, 2)"`` or
        ``"1 | g"``.
    ignore_asis: bool
        If ``True``, terms wrapped in ``I()`` are kept verbatim. If ``None`` it uses the
        ``CLEAN_ASIS`` configuration option.

    Returns
    -------
    str
        The name of the underlying variable. ``""`` if ``name`` is empty.
    """
    if name is None:
        return ""
    name = str(name).strip()
    if not name:
        return ""
    if ignore_asis is None:
        ignore_asis = config.CLEAN_ASIS == "keep"

    previous = None
    while name != previous:
        previous = name
        name = _remove_wrappers(name, ignore_asis)
    return name


def _remove_wrappers(name, ignore_asis):
    for wrapper in WRAPPERS:
        if wrapper == "I" and ignore_asis:
            continue
        name = _PATTERNS[wrapper].sub(r"\1", name).strip()
    return _BAR.sub(r"\2", name).strip()


def clean_names(x, ignore_asis=None):
    """Get clean names of model terms.

    This function "cleans" names of model terms by removing patterns like ``log()`` or
    ``as.factor()``. It also works with fitted models, in which case it is equal to calling
    ``find_terms(x, flatten=True)``.

    Parameters
    ----------
    x:
        A fitted model, a string, or a sequence of strings.
    ignore_asis: bool
        Keep terms wrapped in ``I()`` as they are written.

    Returns
    -------
    list
        The "cleaned" names, with the same length as ``x`` when ``x`` is a sequence of strings.

    Examples
    --------
    >>> clean_names(["log(outcome)", "as.factor(treatment)", "1 | judge"])
    ['outcome', 'treatment', 'judge']
    """
    if x is None:
        return [""]
    if isinstance(x, str):
        return [clean_name(x, ignore_asis)]
    if isinstance(x, (list, tuple)):
        if not x:
            return [""]
        return [clean_name(name, ignore_asis) for name in x]

    # pylint: disable = import-outside-toplevel
    from .variables import find_terms

    return find_terms(x, flatten=True) or []
