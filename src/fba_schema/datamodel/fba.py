"""Flux balance analysis formulation and results.

An FBA object holds the formulation (objective, bounds, constraints,
knockouts, analysis flags) of one FBA run against a model, and the result
lists the solver fills in once the run completes.
"""

from __future__ import annotations

from pydantic import Field

from fba_schema.datamodel.base import ConfiguredBaseModel


class FBAConstraint(ConfiguredBaseModel):
    name: str | None = None
    rhs: float | None = None
    sign: str | None = None
    compound_terms: dict[str, float] = Field(default_factory=dict)
    reaction_terms: dict[str, float] = Field(default_factory=dict)


class FBAReactionBound(ConfiguredBaseModel):
    modelreaction_ref: str
    variable_type: str | None = Field(default=None, alias="variableType")
    upper_bound: float | None = Field(default=None, alias="upperBound")
    lower_bound: float | None = Field(default=None, alias="lowerBound")


class FBACompoundBound(ConfiguredBaseModel):
    modelcompound_ref: str
    variable_type: str | None = Field(default=None, alias="variableType")
    upper_bound: float | None = Field(default=None, alias="upperBound")
    lower_bound: float | None = Field(default=None, alias="lowerBound")


class FBAVariable(ConfiguredBaseModel):
    """Fields shared by compound, reaction and biomass solution variables."""

    variable_type: str | None = Field(default=None, alias="variableType")
    upper_bound: float | None = Field(default=None, alias="upperBound")
    lower_bound: float | None = Field(default=None, alias="lowerBound")
    variable_class: str | None = Field(default=None, alias="class")
    minimum: float | None = Field(default=None, alias="min")
    maximum: float | None = Field(default=None, alias="max")
    value: float | None = None


class FBACompoundVariable(FBAVariable):
    modelcompound_ref: str


class FBAReactionVariable(FBAVariable):
    modelreaction_ref: str


class FBABiomassVariable(FBAVariable):
    biomass_ref: str


class FBAPromResult(ConfiguredBaseModel):
    object_fraction: float | None = Field(default=None, alias="objectFraction")
    alpha: float | None = None
    beta: float | None = None


class FBADeletionResult(ConfiguredBaseModel):
    feature_refs: list[str] = Field(default_factory=list)
    growth_fraction: float | None = Field(default=None, alias="growthFraction")


class FBAMinimalMediaResult(ConfiguredBaseModel):
    essential_nutrient_refs: list[str] = Field(default_factory=list, alias="essentialNutrient_refs")
    optional_nutrient_refs: list[str] = Field(default_factory=list, alias="optionalNutrient_refs")


class FBAMetaboliteProductionResult(ConfiguredBaseModel):
    modelcompound_ref: str
    maximum_production: float | None = Field(default=None, alias="maximumProduction")


class FBA(ConfiguredBaseModel):
    """Formulation and results of one flux balance analysis."""

    id: str

    # Analysis flags
    fva: bool = False
    flux_minimization: bool = Field(default=False, alias="fluxMinimization")
    find_minimal_media: bool = Field(default=False, alias="findMinimalMedia")
    all_reversible: bool = Field(default=False, alias="allReversible")
    simple_thermo_constraints: bool = Field(default=False, alias="simpleThermoConstraints")
    thermodynamic_constraints: bool = Field(default=False, alias="thermodynamicConstraints")
    no_error_thermodynamic_constraints: bool = Field(default=False, alias="noErrorThermodynamicConstraints")
    minimize_error_thermodynamic_constraints: bool = Field(
        default=False, alias="minimizeErrorThermodynamicConstraints"
    )

    # Objective
    maximize_objective: bool = Field(default=True, alias="maximizeObjective")
    compoundflux_objterms: dict[str, float] = Field(default_factory=dict)
    reactionflux_objterms: dict[str, float] = Field(default_factory=dict)
    biomassflux_objterms: dict[str, float] = Field(default_factory=dict)

    combo_deletions: int | None = Field(default=None, alias="comboDeletions")
    number_of_solutions: int | None = Field(default=None, alias="numberOfSolutions")

    objective_constraint_fraction: float | None = Field(default=None, alias="objectiveConstraintFraction")
    default_max_flux: float | None = Field(default=None, alias="defaultMaxFlux")
    default_max_drain_flux: float | None = Field(default=None, alias="defaultMaxDrainFlux")
    default_min_drain_flux: float | None = Field(default=None, alias="defaultMinDrainFlux")
    prom_kappa: float | None = Field(default=None, alias="PROMKappa")

    decompose_reversible_flux: bool = Field(default=False, alias="decomposeReversibleFlux")
    decompose_reversible_drain_flux: bool = Field(default=False, alias="decomposeReversibleDrainFlux")
    flux_use_variables: bool = Field(default=False, alias="fluxUseVariables")
    drainflux_use_variables: bool = Field(default=False, alias="drainfluxUseVariables")

    # Inputs
    regmodel_ref: str | None = None
    fbamodel_ref: str | None = None
    prommodel_ref: str | None = None
    media_ref: str | None = None
    phenotypeset_ref: str | None = None
    gene_ko_refs: list[str] = Field(default_factory=list, alias="geneKO_refs")
    reaction_ko_refs: list[str] = Field(default_factory=list, alias="reactionKO_refs")
    additional_cpd_refs: list[str] = Field(default_factory=list, alias="additionalCpd_refs")
    uptake_limits: dict[str, float] = Field(default_factory=dict, alias="uptakeLimits")

    parameters: dict[str, str] = Field(default_factory=dict)
    inputfiles: dict[str, str] = Field(default_factory=dict)

    constraints: list[FBAConstraint] = Field(default_factory=list, alias="FBAConstraints")
    reaction_bounds: list[FBAReactionBound] = Field(default_factory=list, alias="FBAReactionBounds")
    compound_bounds: list[FBACompoundBound] = Field(default_factory=list, alias="FBACompoundBounds")

    # Results, filled in once the solver completes
    objective_value: float | None = Field(default=None, alias="objectiveValue")
    outputfiles: dict[str, str] = Field(default_factory=dict)
    phenotypesimulationset_ref: str | None = None

    compound_variables: list[FBACompoundVariable] = Field(default_factory=list, alias="FBACompoundVariables")
    reaction_variables: list[FBAReactionVariable] = Field(default_factory=list, alias="FBAReactionVariables")
    biomass_variables: list[FBABiomassVariable] = Field(default_factory=list, alias="FBABiomassVariables")
    prom_results: list[FBAPromResult] = Field(default_factory=list, alias="FBAPromResults")
    deletion_results: list[FBADeletionResult] = Field(default_factory=list, alias="FBADeletionResults")
    minimal_media_results: list[FBAMinimalMediaResult] = Field(
        default_factory=list, alias="FBAMinimalMediaResults"
    )
    metabolite_production_results: list[FBAMetaboliteProductionResult] = Field(
        default_factory=list, alias="FBAMetaboliteProductionResults"
    )
