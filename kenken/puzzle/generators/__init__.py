from .latin_square_gen import build_solution_grid
from .cage_gen import generate_cages
