"""
Day-count image server

- Resolves `/{days}` or `/{date}` into a label (elapsed days since `date`)
- Draws the label centered on a fixed source PNG using a TrueType font
- Optional `?w=` proportional downscale, returns PNG bytes
- Endpoints: /{days}[.png], /{YYYY-MM-DD}[.png], /health
"""
