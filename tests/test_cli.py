import numpy as np
import pytest

from treehodlr.cli import construct_laplacian_matrix, format_tree, main
from treehodlr.compress import dense_to_tree_hodlr
from treehodlr.errors import InputError
from treehodlr.tree import allocate_tree


def _section(text, header):
    lines = text.splitlines()
    start = lines.index(header) + 1
    block = []
    for line in lines[start:]:
        if not line.strip():
            if block:
                break
            continue
        block.append([float(x) for x in line.split()])
    return np.array(block)


def test_laplacian_structure():
    matrix = construct_laplacian_matrix(6)
    assert matrix.shape == (6, 6)
    assert np.array_equal(matrix, matrix.T)
    assert np.all(np.diag(matrix) == 2.0)
    assert np.all(np.diag(matrix, 1) == -1.0)
    assert np.count_nonzero(matrix) == 6 + 2 * 5


def test_laplacian_row_sums():
    sums = construct_laplacian_matrix(10).sum(axis=1)
    assert sums[0] == 1.0 and sums[-1] == 1.0
    assert np.all(sums[1:-1] == 0.0)


def test_laplacian_negative_size():
    with pytest.raises(InputError):
        construct_laplacian_matrix(-1)


@pytest.mark.parametrize("height", [1, 2, 3])
def test_format_tree_block_counts(height):
    hodlr = allocate_tree(height)
    dense_to_tree_hodlr(hodlr, construct_laplacian_matrix(21), 0.1)
    text = format_tree(hodlr)
    assert text.count("TOP RIGHT CORNER:") == 2**height - 1
    assert text.count("BOTTOM LEFT CORNER:") == 2**height - 1
    assert text.count("TOP LEFT CORNER:") == 2 ** (height - 1)
    assert text.count("depth=MAX") == 1


def test_format_tree_without_data():
    with pytest.raises(InputError):
        format_tree(allocate_tree(1))


def test_main_vector_product(capsys):
    assert main([]) == 0
    out = capsys.readouterr().out
    result = _section(out, "HODLR vector multiplication:")[0]
    expected = np.zeros(10)
    expected[0] = 10.0
    expected[-1] = 10.0
    assert np.allclose(result, expected, atol=1e-5)


def test_main_dense_product_matches_dense(capsys):
    assert main(["--size", "21", "--height", "3"]) == 0
    out = capsys.readouterr().out
    result = _section(out, "HODLR dense matrix multiplication:")
    laplacian = construct_laplacian_matrix(21)
    assert result.shape == (21, 21)
    assert np.allclose(result, laplacian @ laplacian, atol=1e-5)


def test_main_prints_input_matrix(capsys):
    main(["--size", "4", "--height", "1"])
    out = capsys.readouterr().out
    first = []
    for line in out.splitlines():
        if not line.strip():
            break
        first.append([float(x) for x in line.split()])
    assert np.array_equal(np.array(first), construct_laplacian_matrix(4))


def test_main_bad_height(capsys):
    assert main(["--height", "0"]) == 1
    assert "INPUT_ERROR" in capsys.readouterr().err


def test_main_size_too_small(capsys):
    assert main(["--size", "2", "--height", "3"]) == 1
    assert "INPUT_ERROR" in capsys.readouterr().err


def test_main_rejects_non_integer_size():
    with pytest.raises(SystemExit) as info:
        main(["--size", "abc"])
    assert info.value.code == 2


def test_main_svd_demo(capsys):
    assert main(["--svd"]) == 0
    out = capsys.readouterr().out
    s = _section(out, "S:")[0]
    u = _section(out, "U:")
    vt = _section(out, "VT:")
    assert s.shape == (5,)
    assert np.all(s >= 0)
    assert np.all(np.diff(s) <= 1e-9)
    assert u.shape == (5, 5) and vt.shape == (5, 5)
    assert np.allclose(u.T @ u, np.eye(5), atol=1e-4)