CHECKLISTS = [
    {"id": "apertura-cocina", "name": "Apertura de cocina", "type": "cocina", "shift": "apertura"},
    {"id": "apertura-sala", "name": "Apertura de sala", "type": "sala", "shift": "apertura"},
    {"id": "cierre-cocina", "name": "Cierre de cocina", "type": "cocina", "shift": "cierre"},
    {"id": "cierre-sala", "name": "Cierre de sala", "type": "sala", "shift": "cierre"},
]

CHECKLIST_TASKS = {
    "apertura-cocina": [
        {"id": "1", "title": "Revisar temperatura de cámaras frigoríficas", "description": "Verificar que estén entre 0-4°C", "priority": "alta"},
        {"id": "2", "title": "Comprobar estado de aceites de freidoras", "description": "Verificar color y olor", "priority": "alta"},
        {"id": "3", "title": "Revisar fechas de caducidad de productos", "description": "Retirar productos caducados", "priority": "alta"},
        {"id": "4", "title": "Limpiar superficies de trabajo", "description": "Desinfectar mesas y tablas", "priority": "media"},
        {"id": "5", "title": "Verificar stock de ingredientes del día", "description": "Comprobar disponibilidad", "priority": "media"},
    ],
    "apertura-sala": [
        {"id": "1", "title": "Revisar limpieza de mesas y sillas", "description": "Asegurar que estén limpias", "priority": "alta"},
        {"id": "2", "title": "Preparar cubertería y cristalería", "description": "Colocar en posición", "priority": "media"},
        {"id": "3", "title": "Verificar reservas del día", "description": "Revisar sistema de reservas", "priority": "alta"},
        {"id": "4", "title": "Comprobar nivel de carta de bebidas", "description": "Verificar stock de bar", "priority": "media"},
        {"id": "5", "title": "Revisar baños", "description": "Comprobar limpieza y productos", "priority": "media"},
    ],
    "cierre-cocina": [
        {"id": "1", "title": "Registrar temperaturas finales", "description": "Anotar temperaturas de cámaras", "priority": "alta"},
        {"id": "2", "title": "Limpiar y desinfectar zona de trabajo", "description": "Limpieza profunda", "priority": "alta"},
        {"id": "3", "title": "Almacenar alimentos correctamente", "description": "Film y etiquetado", "priority": "alta"},
        {"id": "4", "title": "Apagar equipos", "description": "Verificar apagado de hornos y fuegos", "priority": "alta"},
        {"id": "5", "title": "Sacar basuras", "description": "Retirar residuos", "priority": "media"},
    ],
    "cierre-sala": [
        {"id": "1", "title": "Limpiar mesas y superficies", "description": "Limpieza completa", "priority": "alta"},
        {"id": "2", "title": "Recoger cubertería y cristalería", "description": "Lavar y guardar", "priority": "alta"},
        {"id": "3", "title": "Barrer y fregar suelos", "description": "Limpieza de suelos", "priority": "alta"},
        {"id": "4", "title": "Cerrar caja del día", "description": "Arqueo de caja", "priority": "alta"},
        {"id": "5", "title": "Revisar cierre de puertas y ventanas", "description": "Seguridad", "priority": "alta"},
    ],
}

# lastCheck is stamped when seeding
EQUIPMENT = [
    {"id": "camara-1", "name": "Cámara frigorífica 1", "type": "camara", "status": "ok"},
    {"id": "camara-2", "name": "Cámara frigorífica 2", "type": "camara", "status": "ok"},
    {"id": "camara-3", "name": "Congelador", "type": "camara", "status": "ok"},
    {"id": "freidora-1", "name": "Freidora 1", "type": "freidora", "status": "ok"},
    {"id": "freidora-2", "name": "Freidora 2", "type": "freidora", "status": "ok"},
]

# Passwords come from settings.DEMO_PASSWORD
DEMO_USERS = [
    {"email": "admin@bonalba.com", "username": "admin", "role": "admin", "area": None, "full_name": "Administrador"},
    {"email": "empleado@bonalba.com", "username": "empleado", "role": "empleado", "area": "sala", "full_name": "María García"},
    {"email": "cocina@bonalba.com", "username": "cocinero", "role": "empleado", "area": "cocina", "full_name": "Carlos Martínez"},
    {"email": "encargado.cocina@bonalba.com", "username": "encargado_cocina", "role": "encargado", "area": "cocina", "full_name": "Luis Fernández"},
]
