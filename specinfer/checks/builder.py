"""
Check-program builder.

Instruments check templates for a hypothesis: placeholder inhales and
exhales of specification predicates are replaced by statements that
grant or discharge the predicate, and the state relevant to every such
use is saved into shadow variables at a labelled program point. The
labels are recorded in a Context so that verifier models can later be
mapped back to specification instances.
"""

from typing import List, Optional, Sequence, Tuple

from ..errors import UnsupportedConstructError
from ..inference.hypothesis import Hypothesis
from ..inference.inference import Inference
from ..inference.specification import Instance
from ..lang.expressions import (
    Expression,
    FalseLit,
    LocalVar,
    PredicateAccess,
    PredicateAccessPredicate,
    TrueLit,
    Type,
)
from ..lang.program import Method, Program
from ..lang.statements import (
    Exhale,
    Fold,
    If,
    Inhale,
    Label,
    LocalVarAssign,
    LocalVarDecl,
    MethodCall,
    Seqn,
    Stmt,
    Unfold,
)
from ..lang.traversal import collect_variables, deep_collect
from ..utils.config import CheckConfig, Config
from ..utils.logging import log_with_data, timed
from .context import Context
from .namespace import Namespace
from .scope import Scope

import logging

logger = logging.getLogger(__name__)


class CheckBuilder:
    """
    Builds programs that check hypotheses.

    A builder owns the namespace and context of the build in progress,
    so concurrent builds need separate builders.
    """

    def __init__(
        self,
        original: Program,
        inference: Inference,
        config: Optional[CheckConfig] = None,
    ):
        """
        Args:
            original: Program providing fields and existing predicates
            inference: Source of hypothesis predicates and instances
            config: Check settings; `use_branching` selects how boolean
                snapshot values are recorded
        """
        self.original = original
        self.inference = inference
        self.config = config or CheckConfig()

        self._namespace = Namespace()
        self._context = Context()

    @classmethod
    def from_config(cls, original: Program, inference: Inference, config: Config) -> "CheckBuilder":
        return cls(original, inference, config.check)

    @property
    def use_branching(self) -> bool:
        return self.config.use_branching

    @timed(logger)
    def basic_check(self, checks: Sequence[Seqn], hypothesis: Hypothesis) -> Tuple[Program, Context]:
        """
        Build a program performing the given checks.

        Args:
            checks: Check templates, one method is generated per template
            hypothesis: Hypothesis providing the predicate bodies

        Returns:
            The program and the context describing its snapshots

        Raises:
            UnsupportedConstructError: if a template contains a method call
            InstanceResolutionError: if a predicate access has no instance
        """
        self._clear(checks)

        instrumented = [self.instrument_block(check) for check in checks]
        program = self.build_program(instrumented, hypothesis)

        log_with_data(logger, "INFO", "Built check program", {
            "methods": len(program.methods),
            "snapshots": len(self._context),
        })
        return program, self._context

    def _clear(self, checks: Sequence[Seqn]) -> None:
        reserved = {variable.name for check in checks for variable in collect_variables(check)}
        reserved.update(
            decl.name
            for check in checks
            for block in deep_collect(check, Seqn)
            for decl in block.declarations
        )
        reserved.update(predicate.name for predicate in self.original.predicates)
        self._namespace = Namespace(reserved)
        self._context = Context()

    # ------------------------------------------------------------------
    # Program assembly
    # ------------------------------------------------------------------

    def build_program(self, checks: Sequence[Seqn], hypothesis: Hypothesis) -> Program:
        """Assemble one method per instrumented check."""
        predicates = list(self.original.predicates) + self.inference.predicates(hypothesis)
        methods = [self.build_method(check) for check in checks]
        program = Program(
            domains=[],
            fields=list(self.original.fields),
            functions=[],
            predicates=predicates,
            methods=methods,
            extensions=[],
        )
        logger.debug(f"Check program:\n{program}")
        return program

    def build_method(self, check: Seqn) -> Method:
        """Wrap an instrumented check into a method declaring its variables."""
        name = self._namespace.fresh(self.config.method_base, 0)
        # variables declared by nested blocks stay declared there
        declared = {
            decl.name
            for block in deep_collect(check, Seqn)
            for decl in block.declarations
        }
        declarations = list(check.declarations) + [
            LocalVarDecl(variable.name, variable.typ)
            for variable in collect_variables(check)
            if variable.name not in declared
        ]
        body = Seqn(list(check.statements), declarations)
        return Method(name, [], [], [], [], body)

    # ------------------------------------------------------------------
    # Instrumentation
    # ------------------------------------------------------------------

    def instrument_block(self, sequence: Seqn) -> Seqn:
        """Instrument a block in a scope of its own."""
        scope = Scope()
        for statement in sequence.statements:
            self.instrument(statement, scope)
        return scope.close(sequence.declarations)

    def instrument(self, statement: Stmt, scope: Scope) -> None:
        """Instrument a single statement, appending the result to `scope`."""
        if isinstance(statement, If):
            then_body = self.instrument_block(statement.then_body)
            else_body = self.instrument_block(statement.else_body)
            scope.add(If(statement.condition, then_body, else_body))

        elif isinstance(statement, Seqn):
            scope.add(self.instrument_block(statement))

        elif isinstance(statement, Inhale) and isinstance(statement.expression, PredicateAccessPredicate):
            instance = self.get_instance(statement.expression, scope)
            adapted = self.adapt_predicate(statement.expression, instance)
            # inhale specification, then save state
            scope.add(Inhale(adapted))
            scope.add(Unfold(adapted))
            label = self.save_state(instance, scope)
            self._context.add_inhaled(label, instance)

        elif isinstance(statement, Exhale) and isinstance(statement.expression, PredicateAccessPredicate):
            instance = self.get_instance(statement.expression, scope)
            adapted = self.adapt_predicate(statement.expression, instance)
            # save state while the predicate is still held
            label = self.save_state(instance, scope)
            self._context.add_exhaled(label, instance)
            scope.add(Fold(adapted))
            scope.add(Exhale(adapted))

        elif isinstance(statement, MethodCall):
            raise UnsupportedConstructError("method call", f"call to {statement.name}")

        else:
            scope.add(statement)

    def get_instance(self, predicate: PredicateAccessPredicate, scope: Scope) -> Instance:
        """
        Resolve the instance a predicate access refers to.

        Arguments that are not variables are first assigned to fresh
        temporaries, in argument order.
        """
        arguments: List[LocalVar] = []
        for argument in predicate.access.arguments:
            if isinstance(argument, LocalVar):
                arguments.append(argument)
            else:
                name = self._namespace.fresh(self.config.temporary_base, 0)
                variable = LocalVar(name, argument.typ)
                scope.add(LocalVarAssign(variable, argument))
                arguments.append(variable)

        return self.inference.instance(predicate.access.name, arguments)

    def adapt_predicate(self, predicate: PredicateAccessPredicate, instance: Instance) -> PredicateAccessPredicate:
        """Rewrite an access to use the canonical arguments of its instance."""
        access = PredicateAccess(predicate.access.name, tuple(instance.arguments))
        return PredicateAccessPredicate(access, predicate.permission)

    # ------------------------------------------------------------------
    # State snapshots
    # ------------------------------------------------------------------

    def save_state(self, instance: Instance, scope: Scope) -> str:
        """
        Save the state relevant for an instance and label the program point.

        Returns:
            The label of the snapshot
        """
        label, shadows = self._fresh_label(instance)
        for name in shadows:
            self._namespace.reserve(name)
        for variable in instance.arguments:
            self.save_value(f"{label}_{variable.name}", variable, scope)
        for index, atom in enumerate(instance.actual_atoms):
            self.save_value(f"{label}_{index}", atom, scope)
        scope.add(Label(label))
        return label

    def _fresh_label(self, instance: Instance) -> Tuple[str, List[str]]:
        """Allocate a label whose shadow variable names are all unused."""
        while True:
            label = self._namespace.fresh(self.config.label_base, 0)
            shadows = [f"{label}_{variable.name}" for variable in instance.arguments]
            shadows += [f"{label}_{index}" for index in range(len(instance.formal_atoms))]
            if not any(name in self._namespace for name in shadows):
                return label, shadows

    def save_value(self, name: str, expression: Expression, scope: Scope) -> None:
        """Save the value of an expression in a shadow variable."""
        variable = LocalVar(name, expression.typ)
        if self.use_branching and expression.typ == Type.BOOL:
            then_body = Seqn([LocalVarAssign(variable, TrueLit())])
            else_body = Seqn([LocalVarAssign(variable, FalseLit())])
            scope.add(If(expression, then_body, else_body))
        else:
            scope.add(LocalVarAssign(variable, expression))
