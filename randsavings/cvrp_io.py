# -*- coding: utf-8 -*-
################################################################################
""" This file implements the necessary functionality for reading TSPLIB CVRP
problem instance files, generating new random instances, and writing the
resulting routes to a file.
"""

import random

from collections import namedtuple
from math import pi, cos, sin

from randsavings.routedata import Node
from randsavings.config import DEFAULT_CAPACITY

__author__ = "randsavings contributors"
__license__ = "MIT"
__status__ = "Development"

################################################################################


def _parse_number(s):
    """ tries to convert to int and if it fails to float """
    try:
        return int(s)
    except ValueError:
        return float(s)

ProblemDefinition = namedtuple('ProblemDefinition',
    ['name', 'nodes', 'capacity_constraint'])
def read_TSPLIB_CVRP(file_name):
    """ Returns a namedtuple (name, nodes, C) where
    * name is the NAME of the instance (or the file name if it is not given),
    * nodes is a list of Node(id, x, y, demand) with the depot (id 1) first,
    * C is the vehicle capacity constraint (config.DEFAULT_CAPACITY if the
       file does not set it).

    The reader supports following TSPLIB (Reinelt, 1991) fields:
        NAME
        TYPE (CVRP/TSP)
        DIMENSION
        CAPACITY
        EDGE_WEIGHT_TYPE (EUC_2D/EXACT_2D, distances are always exact)

    and sections:
        NODE_COORD_SECTION
        DEMAND_SECTION
        DEPOT_SECTION

    Other fields are ignored. A TSP file (no DEMAND_SECTION) gets zero demands
    for all nodes.

    Reinelt, G. (1991). Tsplib a traveling salesman problem library. ORSA
        journal on computing, 3(4):376-384
    """
    name = None
    C = None
    N = None
    section = None
    coordinates = {}
    demands = {}
    depot_ids = []
    is_tsp = False

    with open(file_name, "r") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue

            # Parse fields
            if ':' in line:
                field, value = line.split(":",1)
                field = field.strip()
                value = value.strip()

                if 'NAME' == field:
                    name = value
                elif 'TYPE' == field:
                    if not 'CVRP' in value and not 'TSP' in value:
                        raise IOError("Only CVRP TSPLIB files are supported")
                    is_tsp = not 'CVRP' in value
                elif 'DIMENSION' in field:
                    N = int(value)
                elif 'CAPACITY' in field:
                    C = int(value)
                elif 'EDGE_WEIGHT_TYPE' in field:
                    if value not in ["EUC_2D", "EXACT_2D"]:
                        raise IOError("Only euclidian distances are supported")
                continue

            # Section handling
            if 'EOF' in line:
                break
            if 'NODE_COORD_SECTION' in line:
                section = 'NODE_COORD_SECTION'
            elif 'DEMAND_SECTION' in line:
                section = 'DEMAND_SECTION'
            elif 'DEPOT_SECTION' in line:
                section = 'DEPOT_SECTION'
            elif line[0].isalpha():
                # an unsupported section, skip its contents
                section = None
            elif section == 'NODE_COORD_SECTION':
                parts = line.split()
                if len(parts)!=3:
                    raise IOError("Invalid NODE_COORD_SECTION line '%s'"%line)
                coordinates[int(parts[0])] = (_parse_number(parts[1]),
                                              _parse_number(parts[2]))
            elif section == 'DEMAND_SECTION':
                parts = line.split()
                if len(parts)!=2:
                    raise IOError("Invalid DEMAND_SECTION line '%s'"%line)
                demands[int(parts[0])] = _parse_number(parts[1])
            elif section == 'DEPOT_SECTION':
                value = int(line)
                if value>0:
                    depot_ids.append(value)
                    if len(depot_ids)>1:
                        raise IOError("multi depot problems not supported")

    if not coordinates:
        raise IOError("The file %s has no NODE_COORD_SECTION"%file_name)
    if N is not None and len(coordinates)!=N:
        raise IOError("DIMENSION is %d but %d coordinates were given"%
                      (N, len(coordinates)))
    if depot_ids and depot_ids[0]!=1:
        raise IOError("Only instances with the depot as node 1 are supported")

    nodes = []
    for node_id in range(1, len(coordinates)+1):
        if node_id not in coordinates:
            raise IOError("Node ids are not contiguous, node %d is missing"%node_id)
        if node_id in demands:
            demand = demands[node_id]
        elif is_tsp:
            demand = 0
        else:
            raise IOError("Node %d has no demand"%node_id)
        x, y = coordinates[node_id]
        nodes.append(Node(node_id, x, y, demand))

    unknown_ids = set(demands.keys())-set(coordinates.keys())
    if unknown_ids:
        raise IOError("Demand given for unknown node(s) %s"%
                      ", ".join(str(i) for i in sorted(unknown_ids)))

    if name is None:
        name = file_name
    if C is None:
        C = DEFAULT_CAPACITY

    return ProblemDefinition(name, nodes, C)

def generate_CVRP(N, C, muC, sdC, regular=False, R=200.0):
    """ Generate new random CVRP with N customer points and capacity of C.
    Demand of customers is randomly generated with mean of muC and standard
    deviation sdC. Coordinates and demands are integers.
    returns ProblemDefinition(name, nodes, C)
    """
    nodes = [Node(1, 0, 0, 0)] # Depot at 0,0
    alpha = pi/4.0
    for i in range(N):
        if regular:
            alpha+=(2*pi/N)
            r = R
        else:
            # Random angle
            alpha = random.random()*2*pi
            r = R*random.gauss(1.0, 0.33)
        pt_x = int(round(r*cos(alpha)))
        pt_y = int(round(r*sin(alpha)))
        c = int(min(C, max(1.0, random.gauss(muC, sdC))))
        nodes.append(Node(i+2, pt_x, pt_y, c))

    return ProblemDefinition("random %d point problem"%N, nodes, C)

def write_OPT_file(opt_file_path, routes):
    """ Writes the routes (a list of RouteData) to a file, one route per line
    (customer ids only) followed by the total cost. """
    with open(opt_file_path, 'w') as opt_file:
        for ri, route in enumerate(routes):
            opt_file.write("Route #%d: "%(ri+1))
            opt_file.write("\t".join( str(n.id) for n in route.customers))
            opt_file.write("\n")

        cost = sum(r.cost for r in routes)
        if cost == int(cost):
            opt_file.write("Cost : %d\n"%int(cost))
        else:
            opt_file.write("Cost : %.2f\n"%cost)

    return opt_file_path

def write_TSPLIB_file(tsplib_file_path, nodes, C):
    """ Writes the nodes as a coordinate based TSPLIB CVRP file that
    read_TSPLIB_CVRP can read back. """
    with open(tsplib_file_path, 'w') as problem_file:
        problem_file.write("NAME: temporary\n")
        problem_file.write("TYPE: CVRP\n")
        problem_file.write("COMMENT: temporary CVRP problem\n")
        problem_file.write("DIMENSION: %d\n" % len(nodes))
        problem_file.write("EDGE_WEIGHT_TYPE: EUC_2D\n")
        problem_file.write("CAPACITY: %d\n"%C)
        problem_file.write("NODE_COORD_SECTION\n")
        for n in nodes:
            problem_file.write("%d %s %s\n"%(n.id, str(n.x), str(n.y)))
        problem_file.write("DEMAND_SECTION\n")
        for n in nodes:
            problem_file.write("%d %s\n"%(n.id, str(n.demand)))
        problem_file.write("DEPOT_SECTION\n")
        problem_file.write("1\n")
        problem_file.write("-1\n")
        problem_file.write("EOF\n")
    return tsplib_file_path
