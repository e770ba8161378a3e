"""
The MODEL layer contains pure data structures and survey logic.
It has NO knowledge of the GUI (Qt) or the map widget (pyqtgraph).
It deals with Geometry, Navigation, the comparison slider and I/O.
"""
