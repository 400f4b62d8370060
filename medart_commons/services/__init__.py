# Media services
