"""Registry of special forms for the cella evaluator.

Special forms are native operators that receive their arguments unevaluated
and decide themselves what to evaluate. They are bound in the root
environment next to the evaluating builtins by `load_builtins`.
"""

from cella.evaluation.special_forms.function_forms import fn_form, macro_form
from cella.evaluation.special_forms.if_form import if_form
from cella.evaluation.special_forms.loop_forms import while_form
from cella.evaluation.special_forms.progn_form import progn_form
from cella.evaluation.special_forms.quote_forms import quote_form
from cella.evaluation.special_forms.set_form import set_form, setq_form

SPECIAL_FORMS = {
    "progn": progn_form,
    "macro": macro_form,
    "while": while_form,
    "quote": quote_form,
    "setq": setq_form,
    "set": set_form,
    "fn": fn_form,
    "if": if_form,
}
