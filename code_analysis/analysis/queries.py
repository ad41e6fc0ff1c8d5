"""
Fixed Cypher queries over the Component → File → Class → Method graph.

Every hop below Component is an OPTIONAL MATCH so that parents with no
children are still counted, and every count is DISTINCT so a node reached
by several paths is counted once.
"""

LIVENESS_QUERY = "RETURN 1"

COMPLEXITY_LIMIT = 10

CODE_SUMMARY_QUERY = """
MATCH (c:Component)
OPTIONAL MATCH (c)-[:CONTAINS]->(f:File)
OPTIONAL MATCH (f)-[:CONTAINS]->(cls:Class)
OPTIONAL MATCH (cls)-[:CONTAINS]->(m:Method)
RETURN
    count(DISTINCT c) AS components,
    count(DISTINCT f) AS files,
    count(DISTINCT cls) AS classes,
    count(DISTINCT m) AS methods
"""

COMPONENT_DETAILS_QUERY = """
MATCH (c:Component)
OPTIONAL MATCH (c)-[:CONTAINS]->(f:File)
OPTIONAL MATCH (f)-[:CONTAINS]->(cls:Class)
WITH c, collect(DISTINCT f) AS files, collect(DISTINCT cls) AS classes
RETURN {
    name: c.name,
    cohesion: c.cohesion,
    coupling: c.coupling,
    fileCount: size(files),
    classCount: size(classes)
} AS component
"""

COMPLEXITY_METRICS_QUERY = """
MATCH (m:Method)
WHERE m.complexity > 0
RETURN m.fullSignature AS method, m.complexity AS complexity
ORDER BY m.complexity DESC
LIMIT $limit
"""
