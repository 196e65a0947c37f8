# -*- coding: utf-8 -*-
################################################################################
""" This file has some convinient operations on validating CVRP problem nodes,
checking the feasibility of solutions, and calculating the solution quality.
"""

from sys import stderr
from math import isclose

from randsavings.util import objf
from randsavings.config import COST_EPSILON as S_EPS
from randsavings.config import CAPACITY_EPSILON as C_EPS

__author__ = "randsavings contributors"
__license__ = "MIT"
__status__ = "Development"

################################################################################


def validate_nodes(nodes, C):
    """ Checks that the node list is something the heuristic can work with:
    depot first, ids 1..N in order (thus unique), non-negative demands that
    individually fit into a vehicle of capacity C. Raises ValueError if not.
    """
    if not nodes:
        raise ValueError("The problem has no nodes (not even a depot)")
    if C is not None and C<=0:
        raise ValueError("Capacity constraint must be positive, got %s"%str(C))

    seen_ids = set()
    for pos, node in enumerate(nodes):
        if node.id in seen_ids:
            raise ValueError("Duplicate node id %d"%node.id)
        seen_ids.add(node.id)
        if node.id!=pos+1:
            if pos==0:
                raise ValueError("The depot (id 1) must be the first node, "+
                                 "got node %d"%node.id)
            raise ValueError("Node ids must be contiguous 1..N, node "+
                             "%d is at position %d"%(node.id, pos+1))
        if node.demand is None or node.demand<0:
            raise ValueError("Node %d has an invalid demand %s"%
                             (node.id, str(node.demand)))
        if C and node.demand-C_EPS>C:
            raise ValueError("Demand %s of node %d exceeds the capacity %s"%
                             (str(node.demand), node.id, str(C)))

def check_solution_feasibility(routes, nodes, D, C=None,
                               print_violations=False):
    """ This checks if the solution (a list of RouteData) is feasible and that
    the cached route costs and demands are consistent with the route contents.

    Note: This is not performance optimized in any way. Therefore, it is
     advisable to use this for solution verification purposes only, and not i.e.
     as a building block of an algorithm.

    Returns the feasibility status as triple-tuple:
    (covering_feasibility, capacity_feasibility, cached_data_consistency)
    """
    N = len(nodes)
    covering = [0]*N
    covering[0] = 1

    covering_feasibility = True
    capacity_feasibility = True
    cached_data_consistency = True

    for route in routes:
        if route.route[0]!=nodes[0] or route.route[-1]!=nodes[0]:
            if print_violations:
                print("CONSTRAINT VIOLATION: route %s does not start and "%route+
                      "end at the depot", file=stderr)
            covering_feasibility = False

        for node in route.customers:
            if node.id==nodes[0].id or covering[D.index_of(node)]:
                if print_violations:
                    print("CONSTRAINT VIOLATION: node n%d is served twice"%node.id, file=stderr)
                covering_feasibility = False
            else:
                covering[D.index_of(node)] = 1

        c = sum(node.demand for node in route.customers)
        if C and c-C_EPS>C:
            if print_violations:
                print("CONSTRAINT VIOLATION: capacity is exceeded by %.2f"%(c-C), file=stderr)
            capacity_feasibility = False

        l = objf(route.as_index_list(), D)
        if not isclose(l, route.cost, rel_tol=1e-9, abs_tol=S_EPS) or c!=route.demand:
            if print_violations:
                print("INCONSISTENCY: route %s has length %.2f and load %s"%
                      (route, l, str(c)), file=stderr)
            cached_data_consistency = False

    if sum(covering)!=N:
        if print_violations:
            print("CONSTRAINT VIOLATION: some of the nodes are not served", file=stderr)
        covering_feasibility = False

    return (covering_feasibility, capacity_feasibility, cached_data_consistency)

def calculate_objective(routes):
    """ The objective is the total cost (length) of all routes in the CVRP
    solution. """
    return sum(r.cost for r in routes)

def calculate_total_demand(routes):
    return sum(r.demand for r in routes)
