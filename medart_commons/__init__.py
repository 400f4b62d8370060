# Medical Artists media commons
