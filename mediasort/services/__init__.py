"""
Application services layer (use cases).

Services orchestrate the domain logic: scanning target paths, resolving
files to media metadata, computing destinations, placing files and
driving the scan -> sort -> watch control loop.

Services depend on ports (interfaces) from core/, never on concrete
implementations from adapters/.
"""
