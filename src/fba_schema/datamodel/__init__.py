"""Typed entities of the metabolic model object graph.

Root entities (persisted on their own and referenced by absolute
reference): FBAModel, FBA, Gapfilling, Gapgeneration, ModelTemplate.
Everything else is nested inside one of them.
"""

from fba_schema.datamodel.base import ConfiguredBaseModel
from fba_schema.datamodel.fba import (
    FBA,
    FBABiomassVariable,
    FBACompoundBound,
    FBACompoundVariable,
    FBAConstraint,
    FBADeletionResult,
    FBAMetaboliteProductionResult,
    FBAMinimalMediaResult,
    FBAPromResult,
    FBAReactionBound,
    FBAReactionVariable,
)
from fba_schema.datamodel.gapfill import (
    Gapfilling,
    GapfillingReaction,
    GapfillingSolution,
    Gapgeneration,
    GapgenerationSolution,
    GapgenerationSolutionReaction,
)
from fba_schema.datamodel.model import (
    Biomass,
    BiomassCompound,
    FBAModel,
    ModelCompartment,
    ModelCompound,
    ModelGapfill,
    ModelGapgen,
    ModelReaction,
    ModelReactionProtein,
    ModelReactionProteinSubunit,
    ModelReactionReagent,
)
from fba_schema.datamodel.template import (
    ModelTemplate,
    TemplateBiomass,
    TemplateBiomassComponent,
    TemplateReaction,
)

# Entity name -> pydantic class, for every entity of the graph
ENTITY_TYPES: dict[str, type[ConfiguredBaseModel]] = {
    cls.__name__: cls
    for cls in (
        BiomassCompound,
        Biomass,
        ModelCompartment,
        ModelCompound,
        ModelReactionReagent,
        ModelReactionProteinSubunit,
        ModelReactionProtein,
        ModelReaction,
        ModelGapfill,
        ModelGapgen,
        FBAModel,
        FBAConstraint,
        FBAReactionBound,
        FBACompoundBound,
        FBACompoundVariable,
        FBAReactionVariable,
        FBABiomassVariable,
        FBAPromResult,
        FBADeletionResult,
        FBAMinimalMediaResult,
        FBAMetaboliteProductionResult,
        FBA,
        GapgenerationSolutionReaction,
        GapgenerationSolution,
        Gapgeneration,
        GapfillingReaction,
        GapfillingSolution,
        Gapfilling,
        TemplateBiomassComponent,
        TemplateBiomass,
        TemplateReaction,
        ModelTemplate,
    )
}

ROOT_TYPES: tuple[str, ...] = ("FBAModel", "FBA", "Gapfilling", "Gapgeneration", "ModelTemplate")

__all__ = [
    "ENTITY_TYPES",
    "FBA",
    "ROOT_TYPES",
    "Biomass",
    "BiomassCompound",
    "ConfiguredBaseModel",
    "FBABiomassVariable",
    "FBACompoundBound",
    "FBACompoundVariable",
    "FBAConstraint",
    "FBADeletionResult",
    "FBAMetaboliteProductionResult",
    "FBAMinimalMediaResult",
    "FBAModel",
    "FBAPromResult",
    "FBAReactionBound",
    "FBAReactionVariable",
    "Gapfilling",
    "GapfillingReaction",
    "GapfillingSolution",
    "Gapgeneration",
    "GapgenerationSolution",
    "GapgenerationSolutionReaction",
    "ModelCompartment",
    "ModelCompound",
    "ModelGapfill",
    "ModelGapgen",
    "ModelReaction",
    "ModelReactionProtein",
    "ModelReactionProteinSubunit",
    "ModelReactionReagent",
    "ModelTemplate",
    "TemplateBiomass",
    "TemplateBiomassComponent",
    "TemplateReaction",
]
