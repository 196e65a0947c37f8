# -*- coding: utf-8 -*-
###############################################################################
""" This file is a part of the randsavings vehicle routing heuristic and
provides the value types the heuristic operates on: the problem nodes, the
shared read-only distance matrix, and the depot anchored route with its cached
length and load."""
###############################################################################

from collections import namedtuple

import numpy as np
from scipy.spatial.distance import pdist, squareform

from randsavings.util import objf

__author__ = "randsavings contributors"
__license__ = "MIT"
__status__ = "Development"


Node = namedtuple('Node', ['id', 'x', 'y', 'demand'])
Node.__doc__ = """ A problem node. The id is 1-based and the node with id 1 is
the depot. Matrix and solution indices are id-1. """


class DistanceMatrix:
    """ Symmetric matrix of the euclidian distances between all nodes. The
    matrix is indexed with zero based positions (node id - 1); use between()
    to look up distances by the nodes themselves. """

    def __init__(self, D):
        self.D = np.array(D, dtype=float)
        self.D.setflags(write=False)

    def __len__(self):
        return len(self.D)

    def __getitem__(self, ij):
        return self.D[ij]

    @staticmethod
    def index_of(node):
        """ The matrix row (and column) of the node """
        return node.id-1

    def indices_of(self, nodes):
        return np.array([self.index_of(n) for n in nodes], dtype=int)

    def between(self, node_a, node_b):
        return self.D[self.index_of(node_a), self.index_of(node_b)]

    def from_node(self, node, to_nodes):
        """ Distances from the node to each of the to_nodes (a numpy index
        array as returned by indices_of) """
        return self.D[self.index_of(node), to_nodes]

    @staticmethod
    def from_nodes(nodes):
        pts = [(n.x, n.y) for n in nodes]
        if len(pts)<2:
            return DistanceMatrix(np.zeros((len(pts), len(pts))))
        return DistanceMatrix(squareform(pdist(pts, 'euclidean')))


class RouteData:
    """ A depot to depot route with its cached total cost (length) and total
    demand. RouteData is a value type: the route tuple is never modified and a
    merge always produces a new RouteData. """

    def __init__(self, route, cost=0.0, demand=0):
        self.route = tuple(route)
        self.cost = cost
        self.demand = demand
        self.node_set = frozenset(n.id for n in self.route)

    def __str__(self):
        return "%s (d=%d, f=%.2f)"%([n.id for n in self.route],
                                    self.demand, self.cost)

    def __repr__(self):
        return "RouteData(%s)"%str(self)

    def __iter__(self):
        """ allows unpacking the route_data e.g. """
        for e in (self.route,self.cost,self.demand):
            yield e

    def __len__(self):
        return len(self.route)

    def __eq__(self, other):
        if not isinstance(other, RouteData):
            return NotImplemented
        return self.route==other.route and self.cost==other.cost and\
               self.demand==other.demand

    def __hash__(self):
        return hash((self.route, self.cost, self.demand))

    @property
    def depot(self):
        return self.route[0]

    @property
    def customers(self):
        """ The route nodes without the depot visits at both ends """
        return self.route[1:-1]

    def is_dominated_by(self, other):
        """ True if every node of this route is also visited by the other """
        return self.node_set<=other.node_set

    def as_index_list(self):
        return [DistanceMatrix.index_of(n) for n in self.route]

    @staticmethod
    def from_nodes(nodes, D):
        """ Build a route from a depot to depot node sequence calculating the
        cost and demand from scratch. """
        nodes = tuple(nodes)
        cost = objf(D.indices_of(nodes), D)
        demand = sum(n.demand for n in nodes[1:-1])
        return RouteData(nodes, cost, demand)

