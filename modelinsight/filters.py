class InvalidFilterArgument(ValueError):
    pass


FIXED_COMPONENTS = (
    "conditional",
    "zero_inflated",
    "dispersion",
    "instruments",
    "slopes",
    "cluster",
    "correlation",
)

RANDOM_COMPONENTS = ("random", "zero_inflated_random")

# Order in which components are returned
COMPONENTS = (
    "conditional",
    "random",
    "zero_inflated",
    "zero_inflated_random",
    "dispersion",
    "instruments",
    "slopes",
    "cluster",
    "correlation",
)


class VariableFilter:
    """Selects the parts of a model that are inspected.

    Parameters
    ----------
    effects: str
        One of ``"fixed"``, ``"random"`` or ``"all"``.
    component: str
        One of ``"all"``, ``"conditional"``, ``"zi"``, ``"zero_inflated"``, ``"dispersion"``, or
        ``"instruments"``. ``"zi"`` is an alias of ``"zero_inflated"``.
    """

    FIELDS = {
        "effects": ("fixed", "random", "all"),
        "component": ("all", "conditional", "zi", "zero_inflated", "dispersion", "instruments"),
    }

    def __init__(self, effects="fixed", component="all"):
        self.effects = effects
        self.component = component

    def __setattr__(self, key, value):
        if key in VariableFilter.FIELDS:
            choices = VariableFilter.FIELDS[key]
            if value not in choices:
                raise InvalidFilterArgument(
                    f"'{value}' is not a valid value for '{key}'. "
                    f"Valid values are: {', '.join(repr(choice) for choice in choices)}."
                )
            if value == "zi":
                value = "zero_inflated"
            super().__setattr__(key, value)
        else:
            raise KeyError(f"'{key}' is not a valid filter option")

    def __getitem__(self, key):
        return getattr(self, key)

    def __eq__(self, other):
        if not isinstance(other, type(self)):
            return False
        return self.effects == other.effects and self.component == other.component

    def __repr__(self):  # pragma: no cover
        return f"{self.__class__.__name__}(effects='{self.effects}', component='{self.component}')"

    @property
    def elements(self):
        """The names of the model components that pass the filter, in canonical order."""
        fixed = {
            "all": FIXED_COMPONENTS,
            "conditional": ("conditional",),
            "zero_inflated": ("zero_inflated",),
            "dispersion": ("dispersion",),
            "instruments": ("instruments",),
        }[self.component]
        random = {
            "all": RANDOM_COMPONENTS,
            "conditional": ("random",),
            "zero_inflated": ("zero_inflated_random",),
            "dispersion": (),
            "instruments": (),
        }[self.component]

        if self.effects == "fixed":
            selected = fixed
        elif self.effects == "random":
            selected = random
        else:
            selected = fixed + random
        return [name for name in COMPONENTS if name in selected]

    def includes(self, name):
        return name in self.elements


def as_filter(effects="fixed", component="all"):
    """Validates a pair of filter arguments and returns a ``VariableFilter``.

    An existing ``VariableFilter`` passed as ``effects`` is returned as it is.
    """
    if isinstance(effects, VariableFilter):
        return effects
    return VariableFilter(effects, component)
