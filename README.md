# tinykeras

A small neural-network library built on numpy. Every layer keeps its
parameters in one flat float vector and views it as the structure it works
on, so optimisers and regularisation act on plain arrays.

## Building blocks

- `tinykeras.layers.Layer`: the interface all layers implement. It has
  `output_size`, `param_count`, `view_params`, `init`, `infer`, `forward`
  and `backward`. Inputs and outputs are 2-D arrays of shape
  `(batch, features)`.
- `tinykeras.linear.Linear(units)`: a fully connected layer,
  `y = x @ weights + biases`. `init` draws the weights from a normal
  distribution with variance `1 / inputs` and leaves the biases as they are.
- `tinykeras.activation.Relu`, `Sigmoid` and `Softmax`: activation layers.
  Each reserves one unused scalar in the parameter vector.
- `tinykeras.network.Net(first, second)` joins two layers into one.
  `tinykeras.network.net(*layers)` chains any number of layers into a
  roughly balanced tree of `Net` pairs.
- `tinykeras.cost.MSE`: mean squared error. `diff` returns the cost and the
  gradient `2 * (output - expected)`.
- `tinykeras.optimise.SGD(alpha)` and
  `Adam(alpha, beta1, beta2, epsilon)`: optimisers that update the
  parameter vector in place.
- `tinykeras.model.Model`: a layer with its parameter vector.
  `Model.from_layer` allocates zeroed parameters and lets the layer
  initialise them. `apply_batch` and `apply_single` run inference.
- `tinykeras.model.Regularisation(l1=..., l2=...)`: adds
  `l1 * sign(p) + 2 * l2 * p` to the gradients.
- `tinykeras.model.Trainer(model, optimiser, cost, regularisation=None)`:
  `train_epoch` trains over shuffled mini-batches and returns the mean batch
  cost. `test_epoch` returns the mean cost over the samples, taken one at a
  time.

## Example

```python
import numpy as np

from tinykeras.activation import Relu, Sigmoid
from tinykeras.cost import MSE
from tinykeras.linear import Linear
from tinykeras.model import Model, Regularisation, Trainer
from tinykeras.network import net
from tinykeras.optimise import Adam

rng = np.random.default_rng(0)
layers = net(Linear(16), Relu(), Linear(16), Relu(), Linear(10), Sigmoid())
model = Model.from_layer(layers, 28 * 28, rng)

trainer = Trainer(
    model,
    Adam(0.001, 0.9, 0.99, 1e-8),
    MSE(),
    Regularisation(l2=0.01),
)

# inputs: shape (n, 784), expected: shape (n, 10)
cost = trainer.train_epoch(inputs, expected, 120, rng)
test_cost = trainer.test_epoch(test_inputs, test_expected)
prediction = model.apply_single(inputs[0])
```

## MNIST

`tinykeras.mnist` reads IDX files (`read_images`, `read_labels`,
`load_data`), scales pixels and one-hot encodes labels (`process_data`), and
trains a small network. Put the four files `train-images-idx3-ubyte`,
`train-labels-idx1-ubyte`, `t10k-images-idx3-ubyte` and
`t10k-labels-idx1-ubyte` in one directory and run:

```
tinykeras-mnist path/to/mnist-data --epochs 20 --batch-size 120
```

The directory defaults to `examples/mnist/data`. The command prints the cost
of each epoch, the test cost, and the model's output for the first training
image next to the expected one.

## What it does not do

There is no way to save a trained model or load one back. The parameters
are a numpy array in `Model.params` that you can store yourself. The MNIST
command does not download the data.

## Tests

```
pip install -e .[test]
pytest
```