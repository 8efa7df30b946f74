from specious.classification import AncestorEntry, ClassificationRecord
from specious.resolver import resolve_rank_name


def test_subject_rank_returns_own_name(aix_record):
    assert resolve_rank_name(aix_record, "species") == "aix sponsa"


def test_ancestor_rank(aix_record):
    assert resolve_rank_name(aix_record, "class") == "aves"
    assert resolve_rank_name(aix_record, "kingdom") == "animalia"
    assert resolve_rank_name(aix_record, "order") == "anseriformes"


def test_missing_rank_is_none(aix_record):
    assert resolve_rank_name(aix_record, "family") is None
    assert resolve_rank_name(aix_record, "genus") is None
    assert resolve_rank_name(aix_record, "phylum") is None


def test_name_is_trimmed_and_lowercased():
    record = ClassificationRecord(rank="genus", name="  Quercus  ")
    assert resolve_rank_name(record, "genus") == "quercus"


def test_first_duplicate_ancestor_wins():
    record = ClassificationRecord(
        rank="species",
        name="Bombus terrestris",
        ancestors=[
            AncestorEntry("family", "Apidae"),
            AncestorEntry("family", "Bombini"),
        ],
    )
    assert resolve_rank_name(record, "family") == "apidae"


def test_subject_is_authoritative_for_its_rank():
    record = ClassificationRecord(
        rank="genus",
        name="Aix",
        ancestors=[AncestorEntry("genus", "Anas")],
    )
    assert resolve_rank_name(record, "genus") == "aix"


def test_empty_lineage():
    record = ClassificationRecord(rank="kingdom", name="Fungi")
    assert resolve_rank_name(record, "kingdom") == "fungi"
    assert resolve_rank_name(record, "species") is None


def test_resolution_is_repeatable(aix_record):
    first = resolve_rank_name(aix_record, "class")
    assert resolve_rank_name(aix_record, "class") == first
