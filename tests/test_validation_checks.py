"""Tests for the individual graph checks, run through validate()."""

from __future__ import annotations

from typing import Any

from fba_schema.datamodel import FBAModel, Gapfilling
from fba_schema.validation import CallableResolver, Rule, StaticResolver, ValidationReport, validate

MODEL_REF = "ws/Ecoli_model"


def _rules_at(report: ValidationReport, path: str) -> list[Rule]:
    return [f.rule for f in report if f.path == path]


class TestWellFormedness:
    """Phase 1: presence, types and reference syntax."""

    def test_malformed_reference_reported_once(self, model_wire: dict[str, Any]) -> None:
        """A malformed reference is not also reported as unresolved."""
        model_wire["modelcompounds"][0]["modelcompartment_ref"] = "c0"
        report = validate(model_wire, root_type="FBAModel")
        assert report.as_tuples()[0][:2] == ("modelcompounds[0].modelcompartment_ref", "malformed_reference")
        assert len(report) == 1

    def test_wrong_reference_target(self, model_wire: dict[str, Any]) -> None:
        """A compartment reference pointing into the compound list names the wrong target."""
        model_wire["modelcompounds"][0]["modelcompartment_ref"] = "~/modelcompounds/id/cpd00001_c0"
        report = validate(model_wire, root_type="FBAModel")
        assert [f.rule for f in report] == [Rule.WRONG_REFERENCE_TARGET]
        assert "KBaseFBA.FBAModel.modelcompartments" in report.findings[0].message

    def test_absolute_reference_malformed(self, model_wire: dict[str, Any]) -> None:
        model_wire["genome_ref"] = "Ecoli_genome"
        report = validate(model_wire, root_type="FBAModel")
        assert _rules_at(report, "genome_ref") == [Rule.MALFORMED_REFERENCE]

    def test_missing_required_reference(self, model_wire: dict[str, Any]) -> None:
        del model_wire["modelreactions"][0]["modelReactionReagents"][0]["modelcompound_ref"]
        report = validate(model_wire, root_type="FBAModel")
        path = "modelreactions[0].modelReactionReagents[0].modelcompound_ref"
        assert _rules_at(report, path) == [Rule.MISSING_VALUE]

    def test_missing_id(self, model_wire: dict[str, Any]) -> None:
        del model_wire["modelcompartments"][0]["id"]
        report = validate(model_wire, root_type="FBAModel")
        assert _rules_at(report, "modelcompartments[0].id") == [Rule.MISSING_VALUE]

    def test_empty_id(self, model_wire: dict[str, Any]) -> None:
        model_wire["biomasses"][0]["id"] = ""
        report = validate(model_wire, root_type="FBAModel")
        assert _rules_at(report, "biomasses[0].id") == [Rule.MISSING_VALUE]

    def test_scalar_types(self, model_wire: dict[str, Any]) -> None:
        model_wire["modelcompounds"][0]["charge"] = "zero"
        model_wire["modelcompartments"][0]["compartmentIndex"] = 0.5
        model_wire["modelreactions"][0]["direction"] = 5
        model_wire["modelreactions"][0]["probability"] = True
        report = validate(model_wire, root_type="FBAModel")
        assert _rules_at(report, "modelcompounds[0].charge") == [Rule.INVALID_TYPE]
        assert _rules_at(report, "modelcompartments[0].compartmentIndex") == [Rule.INVALID_TYPE]
        assert _rules_at(report, "modelreactions[0].direction") == [Rule.INVALID_TYPE]
        assert _rules_at(report, "modelreactions[0].probability") == [Rule.INVALID_TYPE]

    def test_integral_float_is_an_integer(self, model_wire: dict[str, Any]) -> None:
        model_wire["modelcompartments"][0]["compartmentIndex"] = 1.0
        assert validate(model_wire, root_type="FBAModel").is_valid

    def test_flag_accepts_zero_and_one(self, model_wire: dict[str, Any]) -> None:
        subunit = model_wire["modelreactions"][0]["modelReactionProteins"][0]["modelReactionProteinSubunits"][0]
        subunit["triggering"] = 1
        subunit["optionalSubunit"] = 2
        report = validate(model_wire, root_type="FBAModel")
        assert [f.path for f in report] == [
            "modelreactions[0].modelReactionProteins[0].modelReactionProteinSubunits[0].optionalSubunit"
        ]

    def test_reference_list_items(self, model_wire: dict[str, Any]) -> None:
        subunit = model_wire["modelreactions"][0]["modelReactionProteins"][0]["modelReactionProteinSubunits"][0]
        subunit["feature_refs"] = [42, "ws/Ecoli_genome/features/id/kb|g.0.peg.1", "peg.2"]
        report = validate(model_wire, root_type="FBAModel")
        base = "modelreactions[0].modelReactionProteins[0].modelReactionProteinSubunits[0].feature_refs"
        assert report.as_tuples()[0][:2] == (f"{base}[0]", "invalid_type")
        assert report.as_tuples()[1][:2] == (f"{base}[2]", "malformed_reference")
        assert len(report) == 2

    def test_reference_list_not_a_list(self, gapfilling_wire: dict[str, Any]) -> None:
        gapfilling_wire["guaranteedReaction_refs"] = "kbase/default/reactions/id/rxn00001"
        report = validate(gapfilling_wire, root_type="Gapfilling")
        assert _rules_at(report, "guaranteedReaction_refs") == [Rule.INVALID_TYPE]

    def test_reference_mapping_keys(self, fba_wire: dict[str, Any]) -> None:
        fba_wire["reactionflux_objterms"] = {"rxn05573_c0": 1.0, f"{MODEL_REF}/modelreactions/id/rxn1": "one"}
        report = validate(fba_wire, root_type="FBA")
        assert _rules_at(report, "reactionflux_objterms[rxn05573_c0]") == [Rule.MALFORMED_REFERENCE]
        assert _rules_at(report, f"reactionflux_objterms[{MODEL_REF}/modelreactions/id/rxn1]") == [
            Rule.INVALID_TYPE
        ]

    def test_string_mapping_values(self, fba_wire: dict[str, Any]) -> None:
        fba_wire["parameters"] = {"solver": "GLPK", "threads": 4}
        report = validate(fba_wire, root_type="FBA")
        assert [f.path for f in report] == ["parameters[threads]"]


class TestUniqueness:
    """Phase 2: ids unique within their list."""

    def test_duplicate_compartment_id(self, model_wire: dict[str, Any]) -> None:
        model_wire["modelcompartments"][1]["id"] = "c0"
        report = validate(model_wire, root_type="FBAModel")
        duplicates = report.get_findings_by_rule(Rule.DUPLICATE_ID)
        assert len(duplicates) == 1
        assert duplicates[0].path == "modelcompartments[1].id"
        assert "first at index 0" in duplicates[0].message

    def test_each_repeat_reported(self, model_wire: dict[str, Any]) -> None:
        compound = model_wire["modelcompounds"][0]
        model_wire["modelcompounds"] = [compound, dict(compound), dict(compound)]
        report = validate(model_wire, root_type="FBAModel")
        paths = [f.path for f in report.get_findings_by_rule(Rule.DUPLICATE_ID)]
        assert paths == ["modelcompounds[1].id", "modelcompounds[2].id"]

    def test_same_id_in_different_lists(self, model_wire: dict[str, Any]) -> None:
        """Uniqueness is per list."""
        model_wire["biomasses"][0]["id"] = "c0"
        assert validate(model_wire, root_type="FBAModel").is_valid

    def test_nested_lists(self, gapfilling_wire: dict[str, Any]) -> None:
        gapfilling_wire["gapfillingSolutions"][2]["id"] = "gfsol.0"
        report = validate(gapfilling_wire, root_type="Gapfilling")
        assert [f.path for f in report] == ["gapfillingSolutions[2].id"]

    def test_gapfill_links(self, model_wire: dict[str, Any]) -> None:
        link = {"gapfill_id": "gf", "gapfill_ref": "ws/gf.1", "integrated": False}
        model_wire["gapfillings"] = [link, dict(link)]
        report = validate(model_wire, root_type="FBAModel")
        assert [f.path for f in report] == ["gapfillings[1].gapfill_id"]


class TestResolution:
    """Phase 3: local and external reference resolution."""

    def test_local_reference_must_use_tilde(self, model_wire: dict[str, Any]) -> None:
        model_wire["modelcompounds"][0]["modelcompartment_ref"] = f"{MODEL_REF}/modelcompartments/id/c0"
        report = validate(model_wire, root_type="FBAModel")
        assert _rules_at(report, "modelcompounds[0].modelcompartment_ref") == [Rule.UNRESOLVED_REFERENCE]
        assert "'~'" in report.findings[0].message

    def test_dangling_reagent(self, model_wire: dict[str, Any]) -> None:
        model_wire["modelreactions"][0]["modelReactionReagents"][1]["modelcompound_ref"] = (
            "~/modelcompounds/id/cpd99999_c0"
        )
        report = validate(model_wire, root_type="FBAModel")
        assert [f.path for f in report] == ["modelreactions[0].modelReactionReagents[1].modelcompound_ref"]

    def test_dangling_biomass_compound(self, model_wire: dict[str, Any]) -> None:
        model_wire["modelcompounds"] = model_wire["modelcompounds"][1:]
        report = validate(model_wire, root_type="FBAModel")
        assert [f.path for f in report] == ["biomasses[0].biomasscompounds[0].modelcompound_ref"]

    def test_external_unresolved(self, fba_model: FBAModel) -> None:
        """Only a definite "no" from the resolver is reported."""
        resolver = CallableResolver(lambda ref: ref != "ws/GramNegModelTemplate")
        report = validate(fba_model, resolver=resolver)
        assert report.as_tuples() == [
            (
                "template_ref",
                "unresolved_reference",
                "template_ref 'ws/GramNegModelTemplate' does not resolve to a KBaseFBA.ModelTemplate",
            )
        ]

    def test_unknown_is_not_unresolved(self, fba_model: FBAModel) -> None:
        assert validate(fba_model, resolver=StaticResolver()).is_valid

    def test_closed_resolver(self, fba_model: FBAModel) -> None:
        """A closed resolver reports every external reference it does not know."""
        resolver = StaticResolver(
            known_refs=[
                "ws/Ecoli_genome",
                "kbase/default/compartments/id/c",
                "kbase/default/compartments/id/e",
                "kbase/default/compounds/id/cpd00001",
                "kbase/default/compounds/id/cpd00027",
                "kbase/default/reactions/id/rxn05573",
                "kbase/default_mapping/complexes/id/cpx00001",
                "ws/Ecoli_genome/features/id/kb|g.0.peg.1",
            ],
            closed=True,
        )
        report = validate(fba_model, resolver=resolver)
        assert [f.path for f in report] == ["template_ref"]

    def test_subpath_into_stored_object(self, fba_model: FBAModel) -> None:
        biochemistry = {
            "compounds": [{"id": "cpd00001"}],
            "compartments": [{"id": "c"}, {"id": "e"}],
            "reactions": [{"id": "rxn05573"}],
        }
        report = validate(fba_model, resolver=StaticResolver({"kbase/default": biochemistry}))
        assert [f.path for f in report] == ["modelcompounds[1].compound_ref", "modelcompounds[2].compound_ref"]


class TestValueDomain:
    """Phase 4: ranges, choices, signs and bound ordering."""

    def test_probability_range(self, model_wire: dict[str, Any]) -> None:
        model_wire["modelreactions"][0]["probability"] = 1.5
        report = validate(model_wire, root_type="FBAModel")
        assert _rules_at(report, "modelreactions[0].probability") == [Rule.OUT_OF_RANGE]

    def test_probability_limits_inclusive(self, model_wire: dict[str, Any]) -> None:
        for value in (0, 1, 0.0, 1.0):
            model_wire["modelreactions"][0]["probability"] = value
            assert validate(model_wire, root_type="FBAModel").is_valid

    def test_direction_choice(self, model_wire: dict[str, Any]) -> None:
        model_wire["modelreactions"][0]["direction"] = "<=>"
        report = validate(model_wire, root_type="FBAModel")
        assert _rules_at(report, "modelreactions[0].direction") == [Rule.INVALID_CHOICE]

    def test_constraint_sign(self, fba_wire: dict[str, Any]) -> None:
        fba_wire["FBAConstraints"][0]["sign"] = "<="
        report = validate(fba_wire, root_type="FBA")
        assert _rules_at(report, "FBAConstraints[0].sign") == [Rule.INVALID_CHOICE]

    def test_reagent_coefficients_signed(self, model_wire: dict[str, Any]) -> None:
        model_wire["modelreactions"][0]["modelReactionReagents"][0]["coefficient"] = -2.5
        assert validate(model_wire, root_type="FBAModel").is_valid

    def test_negative_multiplier(self, gapfilling_wire: dict[str, Any]) -> None:
        gapfilling_wire["drainFluxMultiplier"] = -1
        report = validate(gapfilling_wire, root_type="Gapfilling")
        assert _rules_at(report, "drainFluxMultiplier") == [Rule.NEGATIVE_VALUE]

    def test_negative_reaction_multiplier(self, gapfilling_wire: dict[str, Any]) -> None:
        gapfilling_wire["reactionMultipliers"] = {"kbase/default/reactions/id/rxn00001": -2.0}
        report = validate(gapfilling_wire, root_type="Gapfilling")
        assert [f.path for f in report] == ["reactionMultipliers[kbase/default/reactions/id/rxn00001]"]
        assert report.findings[0].rule == Rule.NEGATIVE_VALUE

    def test_negative_cost_and_time(self, gapfilling_wire: dict[str, Any]) -> None:
        gapfilling_wire["gapfillingSolutions"][1]["solutionCost"] = -3
        gapfilling_wire["totalTimeLimit"] = -1
        report = validate(gapfilling_wire, root_type="Gapfilling")
        assert {f.path for f in report} == {"gapfillingSolutions[1].solutionCost", "totalTimeLimit"}

    def test_zero_is_non_negative(self, gapfilling_wire: dict[str, Any]) -> None:
        gapfilling_wire["transporterMultiplier"] = 0
        assert validate(gapfilling_wire, root_type="Gapfilling").is_valid

    def test_variable_bounds(self, fba_wire: dict[str, Any]) -> None:
        fba_wire["objectiveValue"] = 0.8
        fba_wire["FBACompoundVariables"] = [
            {
                "modelcompound_ref": f"{MODEL_REF}/modelcompounds/id/cpd00027_e0",
                "lowerBound": 5,
                "upperBound": -5,
            }
        ]
        report = validate(fba_wire, root_type="FBA")
        assert _rules_at(report, "FBACompoundVariables[0].lowerBound") == [Rule.BOUNDS_ORDER]

    def test_one_sided_bound(self, fba_wire: dict[str, Any]) -> None:
        fba_wire["FBAReactionBounds"][0]["upperBound"] = None
        fba_wire["FBAReactionBounds"][0]["lowerBound"] = 500
        assert validate(fba_wire, root_type="FBA").is_valid


class TestConsistency:
    """Phase 5: cross-object consistency."""

    def test_single_integrated_solution(self, gapfilling_wire: dict[str, Any]) -> None:
        gapfilling_wire["gapfillingSolutions"][0]["integrated"] = True
        gapfilling_wire["gapfillingSolutions"][2]["integrated"] = True
        report = validate(gapfilling_wire, root_type="Gapfilling")
        assert report.as_tuples() == [
            (
                "gapfillingSolutions[2].integrated",
                "multiple_integrated_solutions",
                "Solution 2 is marked integrated but solution 0 already is",
            )
        ]

    def test_one_integrated_solution_allowed(self, gapfilling_wire: dict[str, Any]) -> None:
        gapfilling_wire["gapfillingSolutions"][1]["integrated"] = True
        assert validate(gapfilling_wire, root_type="Gapfilling").is_valid

    def test_gapgen_single_integrated_solution(self) -> None:
        gapgen = {
            "id": "gg",
            "gapgenSolutions": [{"id": "a", "integrated": 1}, {"id": "b", "integrated": 1}],
        }
        report = validate(gapgen, root_type="Gapgeneration")
        assert [f.path for f in report] == ["gapgenSolutions[1].integrated"]

    def test_integrated_without_index(self, model_wire: dict[str, Any]) -> None:
        model_wire["gapfillings"] = [{"gapfill_id": "gf", "gapfill_ref": "ws/gf", "integrated": True}]
        report = validate(model_wire, root_type="FBAModel")
        assert _rules_at(report, "gapfillings[0].integrated_solution") == [Rule.INTEGRATED_SOLUTION_INDEX]

    def test_negative_index(self, model_wire: dict[str, Any]) -> None:
        model_wire["gapgens"] = [
            {"gapgen_id": "gg", "gapgen_ref": "ws/gg", "integrated": True, "integrated_solution": -1}
        ]
        report = validate(model_wire, root_type="FBAModel")
        assert _rules_at(report, "gapgens[0].integrated_solution") == [Rule.INTEGRATED_SOLUTION_INDEX]

    def test_not_integrated_index_ignored(self, model_wire: dict[str, Any], gapfilling: Gapfilling) -> None:
        model_wire["gapfillings"] = [
            {"gapfill_id": "gf", "gapfill_ref": "ws/gf", "integrated": False, "integrated_solution": 9}
        ]
        report = validate(model_wire, resolver=StaticResolver({"ws/gf": gapfilling}), root_type="FBAModel")
        assert report.is_valid

    def test_gapgen_index_checked(self, model_wire: dict[str, Any]) -> None:
        model_wire["gapgens"] = [
            {"gapgen_id": "gg", "gapgen_ref": "ws/gg", "integrated": True, "integrated_solution": 1}
        ]
        stored = {"id": "gg", "gapgenSolutions": [{"id": "only"}]}
        report = validate(model_wire, resolver=StaticResolver({"ws/gg": stored}), root_type="FBAModel")
        assert [f.rule for f in report] == [Rule.INTEGRATED_SOLUTION_INDEX]
        assert "has 1 solution(s)" in report.findings[0].message

    def test_target_model_references(self, fba_wire: dict[str, Any], fba_model: FBAModel) -> None:
        resolver = StaticResolver({MODEL_REF: fba_model})
        assert validate(fba_wire, resolver=resolver, root_type="FBA").is_valid

        fba_wire["reactionKO_refs"] = [f"{MODEL_REF}/modelreactions/id/rxn99999_c0"]
        report = validate(fba_wire, resolver=resolver, root_type="FBA")
        assert report.as_tuples() == [
            (
                "reactionKO_refs[0]",
                "foreign_reference",
                f"{MODEL_REF} has no modelreactions element with id 'rxn99999_c0'",
            )
        ]

    def test_target_model_objective_terms(self, fba_wire: dict[str, Any], fba_model: FBAModel) -> None:
        fba_wire["biomassflux_objterms"] = {f"{MODEL_REF}/biomasses/id/bio2": 1.0}
        report = validate(fba_wire, resolver=StaticResolver({MODEL_REF: fba_model}), root_type="FBA")
        assert [f.path for f in report] == [f"biomassflux_objterms[{MODEL_REF}/biomasses/id/bio2]"]

    def test_target_model_unavailable(self, fba_wire: dict[str, Any]) -> None:
        """Without the target model the references are checked for form only."""
        fba_wire["reactionKO_refs"] = [f"{MODEL_REF}/modelreactions/id/rxn99999_c0"]
        assert validate(fba_wire, resolver=StaticResolver(), root_type="FBA").is_valid

    def test_gapfilling_target_model(self, gapfilling_wire: dict[str, Any], fba_model: FBAModel) -> None:
        gapfilling_wire["gapfillingSolutions"][0]["koRestore_refs"] = [f"{MODEL_REF}/modelreactions/id/rxn0_c0"]
        report = validate(gapfilling_wire, resolver=StaticResolver({MODEL_REF: fba_model}), root_type="Gapfilling")
        assert [f.path for f in report] == ["gapfillingSolutions[0].koRestore_refs[0]"]

    def test_results_before_solve(self, fba_wire: dict[str, Any]) -> None:
        fba_wire["FBAReactionVariables"] = [
            {"modelreaction_ref": f"{MODEL_REF}/modelreactions/id/rxn05573_c0", "value": 5.0}
        ]
        report = validate(fba_wire, root_type="FBA")
        assert [(f.path, f.rule) for f in report] == [("FBAReactionVariables", Rule.RESULTS_BEFORE_SOLVE)]

    def test_results_after_solve(self, fba_wire: dict[str, Any]) -> None:
        fba_wire["objectiveValue"] = 0.0
        fba_wire["FBADeletionResults"] = [{"feature_refs": [], "growthFraction": 0.5}]
        assert validate(fba_wire, root_type="FBA").is_valid

    def test_link_coefficients_length(self, template_wire: dict[str, Any]) -> None:
        template_wire["templateBiomasses"][0]["templateBiomassComponents"][0]["link_coefficients"] = [40]
        report = validate(template_wire, root_type="ModelTemplate")
        assert report.as_tuples() == [
            (
                "templateBiomasses[0].templateBiomassComponents[0].link_coefficients",
                "length_mismatch",
                "1 link coefficient(s) for 2 linked compound(s)",
            )
        ]
