# -*- coding: utf-8 -*-
###############################################################################
""" This file is a part of the randsavings vehicle routing heuristic and
provides shared utility functions for the algorithm implementations. Routes
here are plain lists of zero based node indices where 0 is the depot (node
index is the node id minus one)."""
###############################################################################

__author__ = "randsavings contributors"
__license__ = "MIT"
__status__ = "Development"


def objf(route, D):
    """ Length of the route given as matrix indices (see
    DistanceMatrix.index_of and RouteData.as_index_list). Both depot visits
    must be included. """
    return sum(( D[route[i-1],route[i]] for i in range(1,len(route))))

def is_better_sol(best_f, best_K, sol_f, sol_K, minimize_K):
    """Compares a solution against the current best and returns True if the
    solution is actually better according to minimize_K, which sets the primary
    optimization target (True=number of vehicles, False=total cost)."""
    
    if sol_f is None or sol_K is None:
        return False
    if best_f is None or best_K is None:
        return True
    elif minimize_K:
        return (sol_K<best_K) or (sol_K==best_K and sol_f<best_f)
    else:
        return sol_f<best_f
