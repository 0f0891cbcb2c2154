import logging

from .errors import (BrokenInvariantError, DeadlineExceeded, InfiniteEnumerationError, PresentationError,
                     QuiverAlgebraError, UnsupportedOperationError)
from .deadline import time_limit
from .config import Settings, configure_logging, settings
from .word import Arrow, Letter, Monomial, Word
from .quiver import Quiver
from .translation_quiver import TranslationQuiver
from .automaton import LegalityAutomaton
from .algebra import INFINITE, Algebra
from .indec import Indec
from .string_module import GraphHom, StringIndec
from .biserial import BiserialIndec
from .monomial import AlgebraKind, GentleAlgebra, MonomialAlgebra, QuiverAlgebra, StringAlgebra, classify
from .special_biserial import SpecialBiserialAlgebra
from .clique import almost_maximal_cliques, cliques, maximal_cliques
from .poset import PartialOrder, inclusion_order, power_set
from .tau_tilting import IndecTauRigidPair, ModuleWithSupport, TauTiltingData
from .rf_algebra import RfAlgebra
from .parsing import (algebra_from_dict, algebra_to_dict, load_algebra, module_strings, pair_strings,
                      parse_indec, parse_monomial, parse_word, quiver_to_string_quiver, save_algebra,
                      subcat_strings)
from .nakayama import kupisch_generator, kupisch_to_nakayama

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'QuiverAlgebraError', 'PresentationError', 'InfiniteEnumerationError', 'UnsupportedOperationError',
    'BrokenInvariantError', 'DeadlineExceeded', 'time_limit', 'Settings', 'settings', 'configure_logging',
    'Arrow', 'Letter', 'Monomial', 'Word', 'Quiver', 'TranslationQuiver', 'LegalityAutomaton',
    'INFINITE', 'Algebra', 'Indec', 'StringIndec', 'GraphHom', 'BiserialIndec',
    'AlgebraKind', 'QuiverAlgebra', 'MonomialAlgebra', 'StringAlgebra', 'GentleAlgebra',
    'SpecialBiserialAlgebra', 'classify', 'cliques', 'maximal_cliques', 'almost_maximal_cliques',
    'PartialOrder', 'inclusion_order', 'power_set', 'IndecTauRigidPair', 'ModuleWithSupport',
    'TauTiltingData', 'RfAlgebra', 'parse_word', 'parse_monomial', 'parse_indec', 'algebra_from_dict',
    'algebra_to_dict', 'load_algebra', 'save_algebra', 'module_strings', 'subcat_strings',
    'pair_strings', 'quiver_to_string_quiver', 'kupisch_to_nakayama', 'kupisch_generator',
]
