import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from campyviz.rules import (  # noqa: E402
    FUNCTION_CATEGORIES,
    PROCESS_CATEGORIES,
    categorize_function,
    categorize_process,
    normalize_host,
    normalize_species,
    primary_species,
)


def test_host_rules_map_keywords_to_canonical_labels() -> None:
    assert normalize_host("Chicken") == "Poultry"
    assert normalize_host("broiler poultry") == "Poultry"
    assert normalize_host("Beef cattle") == "Cattle"
    assert normalize_host("dairy cow") == "Cattle"
    assert normalize_host("pig") == "Swine"
    assert normalize_host("HUMAN") == "Human"
    assert normalize_host("mixed sources") == "Multiple"


def test_host_rules_keep_unmatched_text_and_flag_blank_as_unknown() -> None:
    assert normalize_host("  Wild bird ") == "Wild bird"
    assert normalize_host("") == "Unknown"
    assert normalize_host("   ") == "Unknown"


def test_host_rules_first_match_wins() -> None:
    assert normalize_host("chicken and cow") == "Poultry"
    assert normalize_host("human, pig") == "Swine"


def test_species_tokens_collapse_to_jejuni_or_coli() -> None:
    assert normalize_species("C. jejuni") == "jejuni"
    assert normalize_species("Campylobacter COLI") == "coli"
    assert normalize_species("C. lari") == "C. lari"


def test_primary_species_prefers_jejuni() -> None:
    assert primary_species(("coli", "jejuni")) == "jejuni"
    assert primary_species(("coli",)) == "coli"
    assert primary_species(("C. lari",)) == "other"
    assert primary_species(()) == "other"


def test_process_categories_follow_fixed_precedence() -> None:
    assert PROCESS_CATEGORIES == (
        "adhesion",
        "invasion",
        "mobility",
        "toxin",
        "colonization",
        "survival",
        "other",
    )
    assert categorize_process("Adhesion to host cells") == "adhesion"
    assert categorize_process("adhesion and invasion") == "adhesion"
    assert categorize_process("Invasion antigen") == "invasion"
    assert categorize_process("flagellar motility") == "mobility"
    assert categorize_process("toxin, cdt") == "toxin"
    assert categorize_process("Colonization factor") == "colonization"
    assert categorize_process("survival in macrophages") == "survival"
    assert categorize_process("Iron uptake") == "other"
    assert categorize_process("") == "other"


def test_function_categories_check_toxin_before_motility() -> None:
    assert FUNCTION_CATEGORIES[-1] == "Other"
    assert categorize_function("cdt toxin near flagella locus") == "Toxin"
    assert categorize_function("flagellin") == "Motility"
    assert categorize_function("Iron acquisition") == "Iron uptake"
    assert categorize_function("oxidative stress response") == "Stress response"
    assert categorize_function("Unknown") == "Other"
