# -*- coding: utf-8 -*-
""" Tests for reading problem files and writing the solutions (route file and
the Graphviz graph). """

import unittest
import random
from io import StringIO
from os import path
from tempfile import TemporaryDirectory

from randsavings.routedata import Node, DistanceMatrix, RouteData
from randsavings.cvrp_io import read_TSPLIB_CVRP, generate_CVRP,\
    write_OPT_file, write_TSPLIB_file
from randsavings.config import DEFAULT_CAPACITY
from randsavings.visualizers.export_dot import output_dot, write_dot_file

TINY_VRP = """NAME : tiny-n5-k2
COMMENT : (two customers each side of the depot)
TYPE : CVRP
DIMENSION : 5
EDGE_WEIGHT_TYPE : EUC_2D
CAPACITY : 30
NODE_COORD_SECTION
 1 0 0
 2 10 0
 3 20 0
 4 -10 0
 5 -20 5
DEMAND_SECTION
1 0
2 10
3 15
4 12
5 9
DEPOT_SECTION
 1
 -1
EOF
"""

class TestReadTSPLIB(unittest.TestCase):
    def setUp(self):
        self.tmpdir = TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)

    def _write(self, content, name="problem.vrp"):
        file_path = path.join(self.tmpdir.name, name)
        with open(file_path, "w") as f:
            f.write(content)
        return file_path

    def test_read_tiny(self):
        problem = read_TSPLIB_CVRP(self._write(TINY_VRP))
        self.assertEqual(problem.name, "tiny-n5-k2")
        self.assertEqual(problem.capacity_constraint, 30)
        self.assertEqual(len(problem.nodes), 5)
        self.assertEqual(problem.nodes[0], Node(1, 0, 0, 0))
        self.assertEqual(problem.nodes[4], Node(5, -20, 5, 9))

    def test_default_capacity(self):
        content = TINY_VRP.replace("CAPACITY : 30\n", "")
        problem = read_TSPLIB_CVRP(self._write(content))
        self.assertEqual(problem.capacity_constraint, DEFAULT_CAPACITY)

    def test_missing_demand(self):
        content = TINY_VRP.replace("5 9\n", "")
        with self.assertRaises(IOError):
            read_TSPLIB_CVRP(self._write(content))

    def test_demand_of_unknown_node(self):
        content = TINY_VRP.replace("5 9\n", "5 9\n6 3\n")
        with self.assertRaises(IOError):
            read_TSPLIB_CVRP(self._write(content))

    def test_dimension_mismatch(self):
        content = TINY_VRP.replace("DIMENSION : 5", "DIMENSION : 6")
        with self.assertRaises(IOError):
            read_TSPLIB_CVRP(self._write(content))

    def test_unsupported_type(self):
        content = TINY_VRP.replace("TYPE : CVRP", "TYPE : HCP")
        with self.assertRaises(IOError):
            read_TSPLIB_CVRP(self._write(content))

    def test_other_depot_than_first(self):
        content = TINY_VRP.replace(" 1\n -1", " 3\n -1")
        with self.assertRaises(IOError):
            read_TSPLIB_CVRP(self._write(content))

    def test_written_problem_can_be_read(self):
        random.seed(2)
        problem = generate_CVRP(6, 50, 10, 3)
        file_path = write_TSPLIB_file(path.join(self.tmpdir.name, "gen.vrp"),
                                      problem.nodes, 50)
        read_problem = read_TSPLIB_CVRP(file_path)
        self.assertEqual(read_problem.nodes, problem.nodes)
        self.assertEqual(read_problem.capacity_constraint, 50)

class TestGenerateCVRP(unittest.TestCase):
    def test_generated_problem(self):
        random.seed(0)
        problem = generate_CVRP(10, 40, 15, 5)
        self.assertEqual(len(problem.nodes), 11)
        self.assertEqual(problem.nodes[0], Node(1, 0, 0, 0))
        self.assertEqual([n.id for n in problem.nodes], list(range(1,12)))
        for n in problem.nodes[1:]:
            self.assertIsInstance(n.x, int)
            self.assertIsInstance(n.demand, int)
            self.assertGreaterEqual(n.demand, 1)
            self.assertLessEqual(n.demand, 40)

class TestSolutionOutput(unittest.TestCase):
    def setUp(self):
        self.nodes = [Node(1, 0, 0, 0), Node(2, 3, 4, 1), Node(3, 6, 8, 1),
                      Node(4, -3, 4, 1)]
        self.D = DistanceMatrix.from_nodes(self.nodes)
        depot = self.nodes[0]
        self.routes = [
            RouteData.from_nodes([depot, self.nodes[1], self.nodes[2], depot], self.D),
            RouteData.from_nodes([depot, self.nodes[3], depot], self.D)]

    def test_output_dot(self):
        out = StringIO()
        output_dot(out, self.nodes, self.routes, label="tiny")
        dot = out.getvalue()
        self.assertTrue(dot.startswith("graph G {"))
        self.assertTrue(dot.rstrip().endswith("}"))
        self.assertIn('layout="fdp";', dot)
        self.assertIn('n0001 [fillcolor=black', dot)
        self.assertIn('pos="6,8!"', dot)
        for edge in ["n0001--n0002", "n0002--n0003", "n0003--n0001",
                     "n0001--n0004", "n0004--n0001"]:
            self.assertIn(edge, dot)

    def test_output_dot_without_routes(self):
        out = StringIO()
        output_dot(out, self.nodes)
        self.assertNotIn("--", out.getvalue())

    def test_write_files(self):
        with TemporaryDirectory() as tmpdir:
            dot_path = write_dot_file(self.nodes, self.routes,
                                      path.join(tmpdir, "results.dot"))
            opt_path = write_OPT_file(path.join(tmpdir, "results.opt"),
                                      self.routes)
            with open(dot_path) as f:
                self.assertIn("n0002--n0003", f.read())
            with open(opt_path) as f:
                lines = f.read().splitlines()
        self.assertEqual(lines[0], "Route #1: 2\t3")
        self.assertEqual(lines[1], "Route #2: 4")
        # 5+5+10 and 5+5
        self.assertEqual(lines[2], "Cost : 30")

if __name__ == '__main__':
    unittest.main()
