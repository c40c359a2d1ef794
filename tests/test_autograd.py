import numpy as np
import pytest

torch = pytest.importorskip("torch")

from nnx import MultilayerPerceptron
from nnx.rng import RandomGenerator
from nnx.training import initialize_weights


def torch_gradients(network: MultilayerPerceptron, inputs, targets):
    params = [torch.tensor(w, dtype=torch.float64, requires_grad=True) for w in network.weights]
    activation = torch.tensor(inputs, dtype=torch.float64)
    for layer, (n_in, n_out) in enumerate(network.layer_sizes):
        matrix = params[layer].reshape(n_out, n_in + 1)
        z = matrix[:, :-1] @ activation + matrix[:, -1]
        if layer == network.num_layers - 1:
            activation = torch.softmax(z, dim=0)
        else:
            activation = torch.tanh(z)
    loss = -(torch.tensor(targets, dtype=torch.float64) * torch.log(activation)).sum()
    loss.backward()
    return [p.grad.numpy() for p in params]


@pytest.mark.parametrize("hidden", [(), (3,), (4, 3)])
def test_backpropagation_matches_autograd(hidden):
    network = MultilayerPerceptron(3, 2, hidden)
    initialize_weights(network, RandomGenerator(17))
    for weights in network.weights:
        weights *= 10.0
    inputs, targets = [0.7, -0.2, 1.5], [0.0, 1.0]

    ours = network.calculate_gradients(inputs, targets)
    expected = torch_gradients(network, inputs, targets)

    for a, b in zip(ours, expected):
        np.testing.assert_allclose(a, b, rtol=1e-10, atol=1e-12)
