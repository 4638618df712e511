"""Registry of special forms for the LIRS evaluator.

Maps Symbols to handler functions that implement non-standard evaluation rules.
The evaluator consults this table before macros and primitives.
"""

from lirs.types.symbol import Symbol
from lirs.evaluation.special_forms.define_form import define_form
from lirs.evaluation.special_forms.defmacro_form import defmacro_form
from lirs.evaluation.special_forms.if_form import if_form
from lirs.evaluation.special_forms.let_form import let_form
from lirs.evaluation.special_forms.macroexpand_forms import macroexpand1_form, macroexpand_form
from lirs.evaluation.special_forms.progn_form import progn_form
from lirs.evaluation.special_forms.quote_forms import quote_form

SPECIAL_FORMS = {
    Symbol("define"): define_form,
    Symbol("if"): if_form,
    Symbol("quote"): quote_form,
    Symbol("begin"): progn_form,
    Symbol("let"): let_form,
    Symbol("defmacro"): defmacro_form,
    Symbol("macroexpand-1"): macroexpand1_form,
    Symbol("macroexpand"): macroexpand_form,
}
