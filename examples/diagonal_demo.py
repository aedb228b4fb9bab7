import os
import sys

# Add the src directory to Python path to import local sparse_ndmatrix
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))


from sparse_ndmatrix import SparseMatrix


def build_diagonals(n: int = 10) -> SparseMatrix:
    """Fill the main diagonal and the anti-diagonal of an n x n window with the row index."""
    matrix = SparseMatrix(ndim=2, default=0)
    for i in range(n):
        matrix[i][i] = i
        matrix[i][n - 1 - i] = i
    return matrix


def main():
    matrix = build_diagonals()

    # inner 8x8 block, rows and columns 1..8
    for i in range(1, 9):
        print(" ".join(str(matrix[i][j]) for j in range(1, 9)))

    print()
    print(f"matrix size = {matrix.size()}")

    print()
    for x, y, value in matrix:
        print(f"[{x}][{y}] = {value}")

    print()
    print(matrix.to_dense(shape=(8, 8), origin=(1, 1)))


if __name__ == "__main__":
    main()
