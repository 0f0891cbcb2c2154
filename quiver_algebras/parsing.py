"""Textual module references, presentations as dictionaries, and display strings.

A module reference is one of::

    2            the simple module at vertex 2
    a*!b*c       a string module; "!" marks an inverse letter, "*" or spaces separate letters
    a*b=c*d      the biserial module of the binomial relation a*b = c*d

A presentation is stored as::

    {"quiver": {"vertices": [...], "arrows": [{"label": ..., "from": ..., "to": ...}]},
     "monoRelations": [[labels]], "biRelations": [[[labels], [labels]]]}
"""

import json
import re
from typing import Dict, Hashable, Iterable, List, Sequence, Tuple

from .biserial import BiserialIndec
from .errors import PresentationError
from .indec import Indec
from .monomial import QuiverAlgebra, classify
from .quiver import Quiver
from .rf_algebra import RfAlgebra
from .special_biserial import SpecialBiserialAlgebra
from .string_module import StringIndec
from .translation_quiver import TranslationQuiver
from .word import Arrow, Monomial, Word


def _tokens(text: str) -> List[str]:
    tokens = [t for t in re.split(r"[ *]", text) if t.strip()]
    if not tokens:
        raise PresentationError(f"Empty module reference {text!r}")
    return [t.strip() for t in tokens]


def _arrow_of_text(quiver: Quiver, token: str) -> Arrow:
    if quiver.has_label(token):
        return quiver.arrow_of_label(token)
    for arrow in quiver.arrows:
        if arrow.label is not None and str(arrow.label) == token:
            return arrow
    raise PresentationError(f"Arrow of label {token} doesn't exist")


def parse_word(quiver: Quiver, text: str) -> Word:
    """
    Parse a word such as ``"a*!b"``, or a vertex name for its trivial word.

    Raises:
        PresentationError: If a label is unknown or the letters don't compose
    """
    tokens = _tokens(text)
    if len(tokens) == 1:
        vertex = next((v for v in quiver.vertices if str(v) == tokens[0]), None)
        if vertex is not None:
            return Word.trivial(vertex)
    letters = []
    for token in tokens:
        if token.startswith("!"):
            letters.append(~_arrow_of_text(quiver, token[1:]))
        else:
            letters.append(_arrow_of_text(quiver, token).to_letter())
    return Word.from_letters(letters)


def parse_monomial(quiver: Quiver, text: str) -> Monomial:
    """
    Parse a path such as ``"a*b"``.

    Raises:
        PresentationError: If a label is unknown or the arrows don't compose
    """
    return Monomial(_arrow_of_text(quiver, token) for token in _tokens(text))


def parse_indec(algebra, text: str) -> Indec:
    """
    Parse a module reference over an algebra.

    Over an RfAlgebra the result is the matching member of its list of
    indecomposables.

    Raises:
        PresentationError: If the reference is malformed, the word is
            illegal, or ``p=q`` is used over an algebra that is not special
            biserial
    """
    if isinstance(algebra, RfAlgebra):
        return algebra.normalize(parse_indec(algebra.algebra, text))
    if "=" in text:
        if not isinstance(algebra, SpecialBiserialAlgebra):
            raise PresentationError(
                "Biserial modules only exist over special biserial algebras")
        parts = text.split("=")
        if len(parts) != 2:
            raise PresentationError(f"Invalid biserial module {text!r}")
        pair = tuple(parse_monomial(algebra.quiver, part) for part in parts)
        return BiserialIndec(algebra, pair)
    return StringIndec(algebra, parse_word(algebra.quiver, text))


def algebra_to_dict(algebra: QuiverAlgebra) -> Dict:
    """Presentation of a quiver algebra, in the JSON layout of ``algebra_from_dict``."""
    quiver = algebra.quiver.to_dict()
    quiver.pop("name", None)
    for arrow in quiver["arrows"]:
        arrow.pop("isTau", None)
    return {
        "quiver": quiver,
        "monoRelations": [r.labels() for r in algebra.relations],
        "biRelations": [[p.labels(), q.labels()] for p, q in algebra.bi_relations],
    }


def algebra_from_dict(data: Dict) -> QuiverAlgebra:
    """
    Build and classify an algebra from its presentation.

    Raises:
        PresentationError: If a key is missing or the presentation is invalid
    """
    try:
        quiver = Quiver.from_dict(data["quiver"])
    except KeyError as e:
        raise PresentationError(f"Missing key {e} in algebra data") from e
    mono_relations = [Monomial(quiver.arrow_of_label(label) for label in labels)
                      for labels in data.get("monoRelations", [])]
    bi_relations = []
    for pair in data.get("biRelations", []):
        if len(pair) != 2:
            raise PresentationError(f"A binomial relation needs two paths, got {pair}")
        bi_relations.append(tuple(Monomial(quiver.arrow_of_label(label) for label in labels)
                                  for labels in pair))
    return classify(quiver, mono_relations, bi_relations)


def save_algebra(algebra: QuiverAlgebra, filename: str) -> None:
    """Save the presentation of an algebra to a JSON file."""
    with open(filename, 'w') as f:
        json.dump(algebra_to_dict(algebra), f, indent=2)


def load_algebra(filename: str) -> QuiverAlgebra:
    """Load and classify an algebra from a JSON file."""
    with open(filename, 'r') as f:
        data = json.load(f)
    return algebra_from_dict(data)


def module_strings(modules: Iterable[Indec], sort: bool = True) -> List[str]:
    """Names of modules, sorted by dimension and then by name with inverses last."""
    modules = list(modules)
    if sort:
        modules = sorted(modules, key=lambda m: m.sort_key())
    return [str(m) for m in modules]


def _collection_key(modules: Sequence[Indec]) -> Tuple:
    return (len(modules), [m.sort_key() for m in modules])


def subcat_strings(subcats: Iterable[Sequence[Indec]], sort: bool = True) -> List[List[str]]:
    """
    Names of the modules of each subcategory.

    With sorting, each subcategory is sorted, then the subcategories by size
    and lexicographically.
    """
    if not sort:
        return [module_strings(c, sort=False) for c in subcats]
    inner = [sorted(c, key=lambda m: m.sort_key()) for c in subcats]
    return [module_strings(c, sort=False) for c in sorted(inner, key=_collection_key)]


def pair_strings(pairs: Iterable[Tuple[Sequence[Indec], Sequence[Indec]]],
                 sort: bool = True) -> List[Tuple[List[str], List[str]]]:
    """Names of pairs of module collections, sorted by their first components."""
    if not sort:
        return [(module_strings(a, sort=False), module_strings(b, sort=False)) for a, b in pairs]
    inner = [(sorted(a, key=lambda m: m.sort_key()), sorted(b, key=lambda m: m.sort_key()))
             for a, b in pairs]
    inner.sort(key=lambda pair: _collection_key(pair[0]))
    return [(module_strings(a, sort=False), module_strings(b, sort=False)) for a, b in inner]


def quiver_to_string_quiver(quiver) -> Quiver:
    """
    Copy of a quiver (or translation quiver) with vertices and labels turned into strings.

    Translation quivers get one translation arrow per mesh, flagged ``is_tau``.
    """
    if isinstance(quiver, TranslationQuiver):
        quiver = quiver.to_quiver()
    vertices: List[Hashable] = [str(v) for v in quiver.vertices]
    arrows = [Arrow(None if a.label is None else str(a.label), str(a.source), str(a.target),
                    is_tau=a.is_tau)
              for a in quiver.arrows]
    return Quiver(vertices, arrows, name=quiver.name, unique_labels=False)
