import pytest

from perceptron import InvalidArgument, Perceptron, PerceptronState, validate_state


def _record(**overrides):
    record = {"bias": 0.5, "learningRate": 0.25, "dimension": 2, "weights": [0.1, -0.2]}
    record.update(overrides)
    return record


def test_save_state_snapshot(rng):
    model = Perceptron(3, bias=0.75, learning_rate=0.2, rng=rng)
    state = model.save_state()
    assert state.bias == 0.75
    assert state.learning_rate == 0.2
    assert state.dimension == 3
    assert list(state.weights) == model.get_weights()

    model.train([1.0, 1.0, 1.0], -1 if model.predict([1.0, 1.0, 1.0]) == 1 else 1)
    assert list(state.weights) != model.get_weights()


def test_state_is_immutable():
    state = PerceptronState(bias=0.0, learning_rate=0.5, dimension=1, weights=(0.0,))
    with pytest.raises(AttributeError):
        state.bias = 1.0


def test_to_dict_uses_wire_names():
    state = PerceptronState(bias=1.0, learning_rate=0.5, dimension=2, weights=(0.1, 0.2))
    assert state.to_dict() == {"bias": 1.0, "learningRate": 0.5, "dimension": 2, "weights": [0.1, 0.2]}


def test_round_trip_keeps_receiving_counters(rng):
    source = Perceptron(2, bias=0.3, learning_rate=0.8, rng=rng)
    for _ in range(5):
        source.train([1.0, -1.0], 1)
        source.train([-1.0, 1.0], -1)

    target = Perceptron(2, rng=rng)
    target.train([1.0, 1.0], 1)
    iterations, error_sum, iteration_error = target.iterations, target.error_sum, target.iteration_error

    target.load_state(source.save_state())
    assert target.get_bias() == source.get_bias()
    assert target.get_learning_rate() == source.get_learning_rate()
    assert target.dimension == source.dimension
    assert target.get_weights() == source.get_weights()
    assert (target.iterations, target.error_sum, target.iteration_error) == (iterations, error_sum, iteration_error)


def test_load_state_accepts_mapping_and_changes_dimension():
    model = Perceptron(1)
    model.load_state(_record(dimension=3, weights=[1, 2, 3]))
    assert model.dimension == 3
    assert model.get_weights() == [1.0, 2.0, 3.0]
    assert model.predict([0.0, 0.0, 0.0]) == 1


def test_load_state_accepts_zero_bias():
    model = Perceptron(2)
    model.load_state(_record(bias=0))
    assert model.get_bias() == 0.0


def test_validate_state_accepts_attribute_names():
    state = validate_state({"bias": 1, "learning_rate": 1, "dimension": 1, "weights": (0,)})
    assert state == PerceptronState(bias=1.0, learning_rate=1.0, dimension=1, weights=(0.0,))
    assert PerceptronState.from_dict(state.to_dict()) == state


@pytest.mark.parametrize(
    "record, field",
    [
        ({"learningRate": 0.5, "dimension": 1, "weights": [0.0]}, "bias"),
        (_record(bias="high"), "bias"),
        (_record(learningRate=0), "learningRate"),
        (_record(learningRate=1.5), "learningRate"),
        (_record(learningRate=None), "learningRate"),
        (_record(dimension=0, weights=[]), "dimension"),
        (_record(dimension=2.0), "dimension"),
        (_record(dimension="2"), "dimension"),
        (_record(weights="ab"), "weights"),
        (_record(weights=[0.1]), "weights"),
        (_record(weights=[0.1, None]), "weights"),
        ({"bias": 0.5, "learningRate": 0.5, "dimension": 2}, "weights"),
    ],
)
def test_load_state_rejects_bad_records(record, field):
    model = Perceptron(2)
    before = model.save_state()
    with pytest.raises(InvalidArgument) as excinfo:
        model.load_state(record)
    assert excinfo.value.code == "invalid_state"
    assert excinfo.value.details["field"] == field
    assert model.save_state() == before


def test_load_state_rejects_non_mapping():
    with pytest.raises(InvalidArgument):
        Perceptron(1).load_state([0.5, 0.5, 1, [0.0]])


def test_repr_is_concise():
    state = PerceptronState(bias=1.0, learning_rate=0.5, dimension=6, weights=(0.0,) * 6)
    assert repr(state).endswith("…])")
