# treehodlr

Hierarchical off-diagonal low-rank (HODLR) matrices stored as a tree.

A square matrix is split into four blocks. The split is then repeated on
the diagonal blocks, `height` times in all. The diagonal blocks at the
bottom of the tree stay dense. Each off-diagonal block is compressed with
a truncated singular value decomposition. The first singular value is
always kept. Truncation starts at the first `s_i` with
`s_i < svd_threshold * s_0`: that value and every one after it are dropped.

## Installation

```
pip install .
```

The only runtime dependency is `numpy`. The tests need `pytest`, which the
`test` extra installs: `pip install .[test]`.

## Usage

```python
import numpy as np
from treehodlr.tree import allocate_tree
from treehodlr.compress import dense_to_tree_hodlr
from treehodlr.algebra import multiply_vector, multiply_hodlr_dense
from treehodlr.cli import construct_laplacian_matrix

matrix = construct_laplacian_matrix(21)
hodlr = allocate_tree(2)
dense_to_tree_hodlr(hodlr, matrix, 0.1)

y = multiply_vector(hodlr, np.full(21, 10.0))
product = multiply_hodlr_dense(hodlr, np.eye(21))
```

### Modules

- `treehodlr.tree`
  - `allocate_tree(height)` builds an empty `TreeHODLR`. Its nodes are
    `InternalNode`, `LeafNode` and `DiagonalNode`, and each leaf's kind is
    given by `NodeType`. A `height` below 1 raises `InputError`.
  - `TreeHODLR.levels()` yields the internal nodes one layer at a time,
    starting at the root.
  - `TreeHODLR.innermost_parents()` returns the lowest layer of internal
    nodes.
  - `TreeHODLR.clear_data()` removes all block data and leaves the tree
    structure in place.
- `treehodlr.compress`
  - `dense_to_tree_hodlr(hodlr, matrix, svd_threshold)` fills the tree
    from a dense square matrix and returns the tree. The input matrix is
    not modified.
  - If the matrix is too small for the tree's height, it raises
    `InputError`. Every internal block must cover at least two rows.
  - If compression fails, the tree is left without data and the error is
    re-raised.
  - `compute_block_sizes(hodlr, m)` sets the block size of every internal
    node. The top-left child gets the larger half.
- `treehodlr.lowrank`
  - `compress_off_diagonal(block, svd_threshold)` returns an
    `OffDiagonalNode`.
  - `OffDiagonalNode` has the members `u`, `v`, `m`, `s` and `n`.
  - `OffDiagonalNode.to_dense()` gives back `u @ v.T`.
- `treehodlr.svd`
  - `svd_double(matrix)` returns the compact SVD as a named tuple
    `(u, s, vt)`.
- `treehodlr.algebra`
  - `multiply_vector(hodlr, vector)` and `multiply_hodlr_dense(hodlr, matrix)`
    return new arrays. Both raise `InputError` if the tree has not been
    filled or if the shapes do not match.
  - `compute_multiply_hodlr_dense_workspace(hodlr, matrix_n)` returns the
    sizes of the two workspaces used by the dense product.
- `treehodlr.errors`
  - Errors are subclasses of `HodlrError`: `AllocationError`, `SvdError`
    and `InputError`. `InputError` is also a `ValueError`.
  - Each error carries its `ErrorCode` in `code`.

## Demo

```
treehodlr-demo
```

The demo builds a 10 x 10 Laplacian matrix and compresses it into a
height-2 tree with threshold 0.1. It prints the matrix and every block of
the tree. It then prints two products: the tree times a vector of tens,
and the tree times the Laplacian.

Options:

| Option | Default | Sets |
| --- | --- | --- |
| `--size` | 10 | the matrix size |
| `--height` | 2 | the tree height |
| `--threshold` | 0.1 | the SVD truncation threshold |
| `--fill` | 10 | the value of every entry of the vector |

With `--svd`, the demo instead prints `U`, `S` and `VT` for a small 5 x 5
sample matrix.

If a step fails, the error is written to standard error and the exit
status is 1.

## Limitations

The package builds HODLR trees in memory and multiplies with them. It
cannot:

- save or load trees;
- solve linear systems;
- factorise;
- add or multiply two HODLR trees together.