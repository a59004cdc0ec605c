"""Graph nodes and edges, and writers for D3, DOT, Graphistry, GEXF, Maltego and vis.js."""