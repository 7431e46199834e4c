from .filters import COMPONENTS
from .formula import Formula
from .utils import is_empty


class MalformedFormulaError(Exception):
    """The formula of a model can't be decomposed into the expected parts."""


def unwrap(formulas):
    """Returns the only formula in ``formulas`` if there is one, or the whole list otherwise.

    Models with a single group-specific term have a single random formula, models with more than
    one have a list of them.
    """
    if isinstance(formulas, list) and len(formulas) == 1:
        return formulas[0]
    return formulas


class FormulaSet(dict):
    """The formulas of the parts of a model, keyed by component name.

    Components are ordered as in ``modelinsight.filters.COMPONENTS`` and only components with
    content are stored. ``"conditional"`` is always present.

    ``random`` and ``zero_inflated_random`` hold a ``Formula`` when the model has a single
    group-specific term, and a list of them when the model has more.
    """

    is_multivariate = False

    def __init__(self, conditional=None, **components):
        if is_empty(conditional):
            raise MalformedFormulaError("The conditional part of the model is missing.")
        unknown = set(components) - set(COMPONENTS)
        if unknown:
            raise ValueError(f"Unknown model components: {sorted(unknown)}.")

        components["conditional"] = conditional
        items = {}
        for name in COMPONENTS:
            value = components.get(name)
            if is_empty(value):
                continue
            try:
                if isinstance(value, (list, tuple)):
                    value = unwrap([Formula.coerce(formula) for formula in value])
                else:
                    value = Formula.coerce(value)
            except TypeError as error:
                raise MalformedFormulaError(f"Invalid '{name}' formula. {error}") from error
            items[name] = value
        super().__init__(items)

    @property
    def conditional(self):
        return self["conditional"]

    def formulas(self, name):
        """Returns the formulas of a component as a list, empty if the component is absent."""
        value = self.get(name)
        if value is None:
            return []
        if isinstance(value, list):
            return value
        return [value]

    def __str__(self):
        lines = []
        for name, value in self.items():
            if isinstance(value, list):
                value = ", ".join(str(formula) for formula in value)
            lines.append(f"{name}: {value}")
        return "\n".join(lines)


class MultivariateFormulaSet(dict):
    """The formulas of a multivariate model, one ``FormulaSet`` per response."""

    is_multivariate = True

    def __init__(self, formula_sets):
        for response, formula_set in formula_sets.items():
            if not isinstance(formula_set, FormulaSet):
                raise ValueError(
                    f"Formulas for '{response}' must be a FormulaSet, not {type(formula_set)}."
                )
        super().__init__(formula_sets)

    def __str__(self):
        blocks = []
        for response, formula_set in self.items():
            blocks.append(f"# {response}\n{formula_set}")
        return "\n\n".join(blocks)
