# -*- coding: utf-8 -*-
""" Writes a CVRP solution as a Graphviz graph with the nodes pinned to their
coordinates. Render it with e.g. `fdp -n -Tpng results.dot -o results.png`. """

from math import log

from randsavings.config import RESULTS_DOT_FILE

ROUTE_COLORS = ["black", "red", "blue", "darkgreen", "orange", "purple",
                "brown", "magenta", "cyan4", "gray40"]

def print_solution_edges(routes, output_handle, colors=None):
    for ri, route in enumerate(routes):
        color = colors[ri%len(colors)] if colors else None
        prev_v = None
        for v in route.route:
            if prev_v is not None and prev_v.id!=v.id:
                if color:
                    print('    n%04d--n%04d [color="%s" penwidth=3];'%
                          (prev_v.id, v.id, color), file=output_handle)
                else:
                    print('    n%04d--n%04d;'%(prev_v.id, v.id),
                          file=output_handle)
            prev_v = v

def output_dot(output_handle, nodes, routes=None, label=None,
               colored_routes=True):
    """ Prints the graph of the nodes and the routes (a list of RouteData)
    to the output_handle. The depot (first node) is drawn filled. """

    # N=1-9->1, N=10-99->2, ...
    label_length = int((log(abs(len(nodes)),10)+1e-15))+1
    label_format = "%0"+str(label_length)+"d"

    print("""graph G {""", file=output_handle)
    print('layout="fdp";', file=output_handle)
    if label:
        print('label="%s"'%label, file=output_handle)
    print("node [shape=circle width=.4 fixedsize=true];", file=output_handle)
    depot = nodes[0]
    print("    n%04d [fillcolor=black style=filled fontcolor=white"%depot.id,
          file=output_handle, end=" ")
    print('label="'+label_format%depot.id+'" pos="%s,%s!"];'%(depot.x, depot.y),
          file=output_handle)
    for node in nodes[1:]:
        print('    n%04d [label="'%node.id+label_format%node.id+
              '" pos="%s,%s!"];'%(node.x, node.y),
              file=output_handle)
    print("", file=output_handle)

    if routes:
        print_solution_edges(routes, output_handle,
                             ROUTE_COLORS if colored_routes else None)

    print("}", file=output_handle)

def write_dot_file(nodes, routes, dot_file_path=RESULTS_DOT_FILE, label=None):
    with open(dot_file_path, 'w') as dot_file:
        output_dot(dot_file, nodes, routes, label)
    return dot_file_path
