"""
Functional model of the fixed-point dense layer hardware, at three levels of abstraction:

- `modules`
- `layers`
- `network`

Modules are the arithmetic building blocks (vector dot, accumulate, bias, activation, saturate). A layer connects its modules into a graph and evaluates them in order, and a network chains layers so that the output vector of one layer is the input vector of the next.

"""
