"""Pytest configuration and shared fixtures for fba-schema tests.

The fixtures build a small but complete glucose-uptake model together with
an FBA formulation and a gap-filling run against it, all of which validate
cleanly. Tests derive broken variants from their wire-format dumps.
"""

from __future__ import annotations

from typing import Any

import pytest

from fba_schema.datamodel import (
    FBA,
    Biomass,
    BiomassCompound,
    FBAConstraint,
    FBAModel,
    FBAReactionBound,
    Gapfilling,
    GapfillingReaction,
    GapfillingSolution,
    ModelCompartment,
    ModelCompound,
    ModelReaction,
    ModelReactionProtein,
    ModelReactionProteinSubunit,
    ModelReactionReagent,
    ModelTemplate,
    TemplateBiomass,
    TemplateBiomassComponent,
    TemplateReaction,
)

MODEL_REF = "ws/Ecoli_model"
GAPFILL_REF = "ws/Ecoli_model.gf.0"
MEDIA_REF = "ws/Carbon-D-Glucose"
BIOCHEM = "kbase/default"


@pytest.fixture
def fba_model() -> FBAModel:
    """Valid two-compartment model with one transport reaction."""
    return FBAModel(
        id="kb|fbamdl.0",
        source="KBase",
        source_id="kb|fbamdl.0",
        name="E. coli glucose uptake",
        type="GenomeScale",
        genome_ref="ws/Ecoli_genome",
        template_ref="ws/GramNegModelTemplate",
        biomasses=[
            Biomass(
                id="bio1",
                name="Biomass",
                dna=0.026,
                protein=0.5,
                biomasscompounds=[
                    BiomassCompound(modelcompound_ref="~/modelcompounds/id/cpd00001_c0", coefficient=-1.0),
                ],
            )
        ],
        modelcompartments=[
            ModelCompartment(
                id="c0",
                compartment_ref=f"{BIOCHEM}/compartments/id/c",
                compartment_index=0,
                label="Cytosol_0",
                ph=7.0,
                potential=0.0,
            ),
            ModelCompartment(
                id="e0",
                compartment_ref=f"{BIOCHEM}/compartments/id/e",
                compartment_index=0,
                label="Extracellular_0",
                ph=7.0,
                potential=0.0,
            ),
        ],
        modelcompounds=[
            ModelCompound(
                id="cpd00001_c0",
                compound_ref=f"{BIOCHEM}/compounds/id/cpd00001",
                name="H2O",
                charge=0,
                formula="H2O",
                modelcompartment_ref="~/modelcompartments/id/c0",
            ),
            ModelCompound(
                id="cpd00027_c0",
                compound_ref=f"{BIOCHEM}/compounds/id/cpd00027",
                name="D-Glucose",
                charge=0,
                formula="C6H12O6",
                modelcompartment_ref="~/modelcompartments/id/c0",
            ),
            ModelCompound(
                id="cpd00027_e0",
                compound_ref=f"{BIOCHEM}/compounds/id/cpd00027",
                name="D-Glucose",
                charge=0,
                formula="C6H12O6",
                modelcompartment_ref="~/modelcompartments/id/e0",
            ),
        ],
        modelreactions=[
            ModelReaction(
                id="rxn05573_c0",
                reaction_ref=f"{BIOCHEM}/reactions/id/rxn05573",
                direction=">",
                protons=0,
                modelcompartment_ref="~/modelcompartments/id/c0",
                probability=0.9,
                reagents=[
                    ModelReactionReagent(modelcompound_ref="~/modelcompounds/id/cpd00027_e0", coefficient=-1),
                    ModelReactionReagent(modelcompound_ref="~/modelcompounds/id/cpd00027_c0", coefficient=1),
                ],
                proteins=[
                    ModelReactionProtein(
                        complex_ref="kbase/default_mapping/complexes/id/cpx00001",
                        subunits=[
                            ModelReactionProteinSubunit(
                                role="Glucose transporter",
                                triggering=True,
                                feature_refs=["ws/Ecoli_genome/features/id/kb|g.0.peg.1"],
                            )
                        ],
                    )
                ],
            )
        ],
    )


@pytest.fixture
def model_wire(fba_model: FBAModel) -> dict[str, Any]:
    """The model as deserialized JSON, keyed by wire names."""
    return fba_model.to_wire()


@pytest.fixture
def gapfilling() -> Gapfilling:
    """Gap-filling run against the model with three solutions, none integrated."""
    return Gapfilling(
        id="kb|gf.0",
        fbamodel_ref=MODEL_REF,
        media_ref=MEDIA_REF,
        reaction_addition_hypothesis=True,
        balanced_reactions_only=True,
        drain_flux_multiplier=1,
        transporter_multiplier=1,
        time_per_solution=3600,
        total_time_limit=18000,
        reaction_multipliers={f"{BIOCHEM}/reactions/id/rxn00001": 2.0},
        solutions=[
            GapfillingSolution(
                id=f"gfsol.{i}",
                solution_cost=10.0 + i,
                media_supplement_refs=[f"{MODEL_REF}/modelcompounds/id/cpd00027_e0"],
                reactions=[
                    GapfillingReaction(
                        reaction_ref=f"{BIOCHEM}/reactions/id/rxn00001",
                        compartment_ref=f"{BIOCHEM}/compartments/id/c",
                        direction=">",
                    )
                ],
            )
            for i in range(3)
        ],
    )


@pytest.fixture
def gapfilling_wire(gapfilling: Gapfilling) -> dict[str, Any]:
    return gapfilling.to_wire()


@pytest.fixture
def fba() -> FBA:
    """Unsolved FBA formulation maximizing biomass."""
    return FBA(
        id="kb|fba.0",
        fbamodel_ref=MODEL_REF,
        media_ref=MEDIA_REF,
        biomassflux_objterms={f"{MODEL_REF}/biomasses/id/bio1": 1.0},
        reaction_ko_refs=[f"{MODEL_REF}/modelreactions/id/rxn05573_c0"],
        constraints=[
            FBAConstraint(
                name="glucose_cap",
                rhs=10.0,
                sign="<",
                compound_terms={f"{MODEL_REF}/modelcompounds/id/cpd00027_e0": 1.0},
            )
        ],
        reaction_bounds=[
            FBAReactionBound(
                modelreaction_ref=f"{MODEL_REF}/modelreactions/id/rxn05573_c0",
                variable_type="flux",
                lower_bound=0,
                upper_bound=100,
            )
        ],
    )


@pytest.fixture
def fba_wire(fba: FBA) -> dict[str, Any]:
    return fba.to_wire()


@pytest.fixture
def model_template() -> ModelTemplate:
    """Template with one reaction and one biomass component linked to two compounds."""
    return ModelTemplate(
        id="kb|tmpl.0",
        name="GramNegative",
        model_type="GenomeScale",
        domain="Bacteria",
        mapping_ref="kbase/default_mapping",
        reactions=[
            TemplateReaction(
                id="rxn05573_c",
                reaction_ref=f"{BIOCHEM}/reactions/id/rxn05573",
                compartment_ref=f"{BIOCHEM}/compartments/id/c",
                complex_refs=["kbase/default_mapping/complexes/id/cpx00001"],
                direction=">",
                type="conditional",
            )
        ],
        biomasses=[
            TemplateBiomass(
                id="bio1",
                name="GramNegativeBiomass",
                type="growth",
                protein=0.5,
                components=[
                    TemplateBiomassComponent(
                        id="cpd00002_c",
                        component_class="energy",
                        compound_ref=f"{BIOCHEM}/compounds/id/cpd00002",
                        compartment_ref=f"{BIOCHEM}/compartments/id/c",
                        coefficient_type="MULTIPLIER",
                        coefficient=-40,
                        linked_compound_refs=[
                            f"{BIOCHEM}/compounds/id/cpd00008",
                            f"{BIOCHEM}/compounds/id/cpd00009",
                        ],
                        link_coefficients=[40, 40],
                    )
                ],
            )
        ],
    )


@pytest.fixture
def template_wire(model_template: ModelTemplate) -> dict[str, Any]:
    return model_template.to_wire()
