"""
The MODEL layer contains pure data structures and puzzle logic.
It has NO knowledge of the GUI (Qt) or the rendering.
It deals with the tower state, move planning, execution, animation paths
and timing of the planner.
"""
