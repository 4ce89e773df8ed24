"""Tests for problem construction and validation."""
import math

import autograd.numpy as np
import pytest

from balaspy import Constraint, Problem, ValidationError


class TestValidation:
    """Canonical-form checks done once at construction."""

    def test_descending_objective_reports_index(self):
        with pytest.raises(ValidationError) as excinfo:
            Problem([5, 3, 8], [[1, 1, 1]], [1])

        assert excinfo.value.kind == "ascending"
        assert excinfo.value.index == 1

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            Problem([2, 1])

    @pytest.mark.parametrize("objective, index", [([0, 1, 2], 0), ([1, -2, 3], 1), ([1, 2, 0], 2)])
    def test_non_positive_objective(self, objective, index):
        with pytest.raises(ValidationError) as excinfo:
            Problem(objective, [[1, 1, 1]], [1])

        assert excinfo.value.kind == "positive"
        assert excinfo.value.index == index

    def test_row_length_mismatch_identifies_constraint(self):
        with pytest.raises(ValidationError) as excinfo:
            Problem([1, 2, 3], [[1, 1, 1], [1, 1]], [1, 1])

        assert excinfo.value.kind == "shape"
        assert excinfo.value.constraint == 1

    def test_rhs_length_mismatch(self):
        with pytest.raises(ValidationError) as excinfo:
            Problem([1, 2], [[1, 1]], [1, 2])

        assert excinfo.value.kind == "shape"

    def test_non_ge_sense_rejected(self):
        with pytest.raises(ValidationError) as excinfo:
            Problem([1, 2], [[1, 1], [1, 0]], [1, 1], senses=[">=", "<="])

        assert excinfo.value.kind == "sense"
        assert excinfo.value.constraint == 1

    def test_non_finite_values(self):
        with pytest.raises(ValidationError) as excinfo:
            Problem([1, 2], [[1, math.inf]], [1])

        assert excinfo.value.kind == "finite"
        assert excinfo.value.constraint == 0
        assert excinfo.value.index == 1

        with pytest.raises(ValidationError) as excinfo:
            Problem([1, 2], [[1, 1]], [math.nan])
        assert excinfo.value.kind == "finite"

    def test_non_numeric_values(self):
        with pytest.raises(ValidationError) as excinfo:
            Problem([1, "two"], [[1, 1]], [1])

        assert excinfo.value.kind == "numeric"

    def test_duplicate_names(self):
        with pytest.raises(ValidationError) as excinfo:
            Problem([1, 2], [[1, 1]], [1], var_names=["a", "a"])

        assert excinfo.value.kind == "names"

    def test_equal_coefficients_allowed(self):
        problem = Problem([1, 1, 1], [[1, 1, 1]], [2])
        assert problem.num_vars == 3

    def test_negative_constraint_coefficients_allowed(self):
        problem = Problem([1, 2], [[1, -1]], [0])
        assert problem.constraints[0, 1] == -1


class TestReadOnly:
    """A constructed problem cannot be modified."""

    def test_arrays_are_read_only(self, pair_cover):
        for arr in (pair_cover.objective, pair_cover.constraints, pair_cover.rhs, pair_cover.columns):
            with pytest.raises(ValueError):
                arr[0] = 99

    def test_attributes_cannot_be_set(self, pair_cover):
        with pytest.raises(AttributeError):
            pair_cover.objective = [1, 1, 1]
        with pytest.raises(AttributeError):
            pair_cover.extra = 1

    def test_input_lists_are_copied(self):
        objective = [1, 2]
        rows = [[1, 1]]
        problem = Problem(objective, rows, [1])

        objective[0] = 100
        rows[0][0] = 100

        assert problem.objective.tolist() == [1, 2]
        assert problem.constraints.tolist() == [[1, 1]]


class TestAccessors:
    def test_shapes_and_columns(self):
        problem = Problem([1, 2, 3], [[1, 0, 2], [0, 1, 1]], [1, 1])

        assert problem.num_vars == 3
        assert problem.num_constraints == 2
        assert problem.columns.shape == (3, 2)
        assert problem.columns.tolist() == [[1, 0], [0, 1], [2, 1]]

    def test_integral_detection(self):
        assert Problem([1, 2], [[1, 1]], [1]).is_integral
        assert Problem([1.0, 2.0], [[1.0, 1.0]], [1.0]).is_integral
        assert not Problem([0.5, 2], [[1, 1]], [1]).is_integral
        assert not Problem([1, 2], [[1, 1]], [0.25]).is_integral

    def test_integral_requires_sums_to_fit(self):
        limit = 2**53 - 1
        assert Problem([1] * 4, [[limit] * 4], [limit]).is_integral
        assert not Problem([1] * 1100, [[limit] * 1100], [limit]).is_integral
        assert not Problem([1] * 1100, [[-limit] * 1100], [0]).is_integral

    def test_default_names(self):
        problem = Problem([1, 2], [[1, 1]], [1])

        assert problem.var_names == ("x0", "x1")
        assert problem.constraint_names == ("c0",)

    def test_evaluate_and_feasibility(self, pair_cover):
        assert pair_cover.evaluate([1, 1, 0]) == 3
        assert pair_cover.is_feasible([1, 1, 0])
        assert not pair_cover.is_feasible([0, 0, 1])
        assert np.array_equal(pair_cover.surplus([0, 0, 1]), np.array([-1]))

    def test_unpack(self, set_cover):
        assert set_cover.unpack([1, 0, 1, 0, 0]) == {"S1": 1, "S2": 0, "S3": 1, "S4": 0, "S5": 0}

    def test_wrong_assignment_length(self, pair_cover):
        with pytest.raises(ValueError):
            pair_cover.evaluate([1, 0])

    def test_no_constraints(self):
        problem = Problem([1, 2])

        assert problem.num_constraints == 0
        assert problem.constraints.shape == (0, 2)
        assert problem.columns.shape == (2, 0)

    def test_no_variables(self):
        problem = Problem([], [[], []], [0, -1])

        assert problem.num_vars == 0
        assert problem.num_constraints == 2


class TestFromConstraints:
    def test_builds_equivalent_problem(self):
        problem = Problem.from_constraints(
            [1, 2, 3],
            [Constraint([1, 1, 1], 2, name="pair"), Constraint([0, 1, 1], 1, name="tail")],
        )

        assert problem.constraints.tolist() == [[1, 1, 1], [0, 1, 1]]
        assert problem.rhs.tolist() == [2, 1]
        assert problem.constraint_names == ("pair", "tail")

    def test_rejects_other_senses(self):
        with pytest.raises(ValidationError) as excinfo:
            Problem.from_constraints([1, 2], [Constraint([1, 1], 1), Constraint([1, 0], 1, op="==")])

        assert excinfo.value.kind == "sense"
        assert excinfo.value.constraint == 1

    def test_constraint_is_frozen(self):
        constraint = Constraint([1, 2], 3)

        assert constraint.coefficients == (1, 2)
        assert len(constraint) == 2
        with pytest.raises(AttributeError):
            constraint.rhs = 4
