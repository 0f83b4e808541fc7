"""
Keyword expansion table for the catalog pre-filter.

Maps how families write school-supply lists (regional slang, brand names used
as generic names, common misspellings) to the vocabulary that appears in
catalog product names.

Keys and targets are written already normalized (lowercase, no accents, no
punctuation). One entry per line: add a new line for every support ticket of
the form "searched X, the right product was never offered".
"""

# =============================================================================
# QUANTITY / PACKAGING NOISE
# =============================================================================
# Stripped from the start of a requested item before tokenizing, so that
# "caja de lapices" does not turn "caja" into a keyword.

NOISE_PREFIXES: tuple[str, ...] = (
    "paquete de",
    "paquetes de",
    "paq de",
    "caja de",
    "cajas de",
    "cajita de",
    "set de",
    "pack de",
    "blister de",
    "bolsa de",
    "bolsita de",
    "sobre de",
    "tubo de",
    "frasco de",
    "pote de",
    "unidades de",
    "unidad de",
    "package of",
    "pack of",
    "box of",
    "set of",
    "bag of",
    "un",
    "una",
    "unos",
    "unas",
)


# =============================================================================
# EXPANSIONS
# =============================================================================
# phrase in the requested item -> phrases expected in catalog names

KEYWORD_EXPANSIONS: dict[str, tuple[str, ...]] = {
    # --- Pens ---
    "birome": ("boligrafo", "lapicera"),
    "biromes": ("boligrafo", "lapicera"),
    "virome": ("boligrafo", "lapicera"),
    "lapicera": ("boligrafo", "lapicera"),
    "lapiceras": ("boligrafo", "lapicera"),
    "boligrafo": ("boligrafo", "lapicera"),
    "bic": ("boligrafo", "bic cristal"),
    "lapicera borrable": ("boligrafo borrable", "borrable"),
    "birome borrable": ("boligrafo borrable", "borrable"),
    "lapicera de gel": ("gel", "roller"),
    "lapicera pluma": ("pluma", "cartucho"),
    "pluma fuente": ("pluma", "cartucho"),
    "cartuchos de tinta": ("cartucho", "tinta"),
    "roller": ("roller", "boligrafo"),

    # --- Pencils ---
    "lapiz negro": ("lapiz negro", "grafito", "hb"),
    "lapiz grafito": ("lapiz negro", "grafito"),
    "lapiz hb": ("lapiz negro", "hb"),
    "lapis": ("lapiz",),
    "lapices de colores": ("lapices de colores", "lapices color", "colores"),
    "lapices de color": ("lapices de colores", "lapices color", "colores"),
    "lapices largos": ("lapices de colores", "largos"),
    "lapices cortos": ("lapices de colores", "cortos"),
    "lapices acuarelables": ("acuarelables", "lapices de colores"),
    "portaminas": ("portaminas", "minas"),
    "lapicero": ("portaminas",),
    "minas de grafito": ("minas", "portaminas"),

    # --- Markers ---
    "fibras": ("marcadores", "fibra"),
    "fibritas": ("marcadores", "fibra"),
    "marcadores finos": ("marcadores", "fibra", "punta fina"),
    "marcadores de colores": ("marcadores",),
    "fibron": ("marcador", "permanente"),
    "fibrones": ("marcador", "permanente"),
    "marcador grueso": ("marcador", "permanente"),
    "marcador permanente": ("marcador permanente", "indeleble"),
    "indeleble": ("marcador permanente", "indeleble"),
    "sharpie": ("marcador permanente", "sharpie"),
    "marcador pizarra": ("marcador para pizarra", "pizarra"),
    "marcador de pizarra": ("marcador para pizarra", "pizarra"),
    "marcador para pizarra": ("marcador para pizarra", "pizarra"),
    "resaltador": ("resaltador", "fluo"),
    "resaltadores": ("resaltador", "fluo"),
    "destacador": ("resaltador", "fluo"),
    "marcador fluo": ("resaltador", "fluo"),
    "stabilo": ("resaltador", "stabilo"),
    "microfibra": ("microfibra", "fibra"),
    "microfibras": ("microfibra", "fibra"),

    # --- Adhesives ---
    "plasticola": ("adhesivo vinilico", "plasticola"),
    "plasticola de color": ("adhesivo vinilico", "plasticola color"),
    "plasticola con brillo": ("adhesivo vinilico", "glitter"),
    "cola vinilica": ("adhesivo vinilico",),
    "adhesivo vinilico": ("adhesivo vinilico",),
    "pegamento": ("adhesivo",),
    "voligoma": ("adhesivo sintetico", "voligoma"),
    "boligoma": ("adhesivo sintetico", "voligoma"),
    "barra adhesiva": ("adhesivo en barra", "barra"),
    "pegamento en barra": ("adhesivo en barra", "barra"),
    "lapiz adhesivo": ("adhesivo en barra", "barra"),
    "adhesivo en barra": ("adhesivo en barra", "barra"),
    "silicona liquida": ("silicona liquida", "adhesivo"),
    "silicona en barra": ("silicona", "barras de silicona"),

    # --- Tapes ---
    "cinta scotch": ("cinta adhesiva", "transparente"),
    "scotch": ("cinta adhesiva", "transparente"),
    "cinta adhesiva": ("cinta adhesiva",),
    "cinta transparente": ("cinta adhesiva", "transparente"),
    "cinta de papel": ("cinta de papel",),
    "cinta enmascarar": ("cinta de papel",),
    "cinta doble faz": ("doble faz",),
    "cinta de embalar": ("cinta de embalar", "embalar"),

    # --- Correction and erasers ---
    "corrector": ("corrector",),
    "liquid paper": ("corrector", "liquid paper"),
    "cinta correctora": ("corrector", "cinta correctora"),
    "goma de borrar": ("goma de borrar", "goma"),
    "goma blanca": ("goma de borrar", "goma"),
    "borrador": ("goma de borrar",),
    "goma lapiz y tinta": ("goma dos colores", "goma"),
    "goma de tinta": ("goma dos colores", "goma"),

    # --- Sharpeners and cutting ---
    "sacapuntas": ("sacapuntas",),
    "saca puntas": ("sacapuntas",),
    "sacapunta": ("sacapuntas",),
    "afilador": ("sacapuntas",),
    "tijera": ("tijera",),
    "tijeras": ("tijera",),
    "tigera": ("tijera",),
    "tijerita": ("tijera", "punta roma"),
    "trincheta": ("cutter",),
    "cutter": ("cutter",),

    # --- Geometry ---
    "regla": ("regla",),
    "escuadra": ("escuadra",),
    "transportador": ("transportador",),
    "compas": ("compas",),
    "juego de geometria": ("juego de geometria", "regla", "escuadra", "transportador"),
    "set de geometria": ("juego de geometria", "regla", "escuadra", "transportador"),

    # --- Paper sold by sheet ---
    "papel afiche": ("afiche",),
    "afiche": ("afiche",),
    "cartulina": ("cartulina",),
    "cartulinas": ("cartulina",),
    "papel crepe": ("crepe",),
    "crepe": ("crepe",),
    "papel madera": ("papel madera",),
    "papel barrilete": ("barrilete",),
    "papel seda": ("barrilete", "seda"),
    "papel calcar": ("calcar", "vegetal"),
    "papel vegetal": ("calcar", "vegetal"),
    "papel de regalo": ("papel de regalo",),

    # --- Paper in packs ---
    "papel glase": ("glace", "papel glace"),
    "papel glace": ("glace", "papel glace"),
    "glase": ("glace",),
    "papel metalizado": ("glace metalizado", "metalizado"),
    "papel lustre": ("glace",),
    "hojas de colores": ("block color", "hojas color"),
    "hojas canson": ("canson", "block de dibujo"),
    "canson": ("canson", "block de dibujo"),
    "block de dibujo": ("block de dibujo", "canson"),
    "block el nene": ("el nene", "block"),
    "el nene": ("el nene", "block"),
    "block de color": ("block", "color"),
    "hojas a4": ("resma", "a4"),
    "resma": ("resma",),
    "papel oficio": ("resma", "oficio"),

    # --- Notebooks and binders ---
    "cuaderno": ("cuaderno",),
    "cuadernos": ("cuaderno",),
    "cuaderno abc": ("cuaderno", "abc"),
    "cuaderno tapa dura": ("cuaderno", "tapa dura"),
    "tapa dura": ("tapa dura",),
    "cuaderno espiral": ("cuaderno", "espiral"),
    "cuaderno de comunicaciones": ("cuaderno", "comunicaciones"),
    "rivadavia": ("rivadavia",),
    "gloria": ("gloria",),
    "repuesto": ("repuesto",),
    "repuestos": ("repuesto",),
    "hojas rayadas": ("repuesto", "rayado"),
    "hojas cuadriculadas": ("repuesto", "cuadriculado"),
    "cuadriculado": ("cuadriculado",),
    "rayado": ("rayado",),
    "hojas numero 3": ("repuesto", "n3"),
    "hojas n 3": ("repuesto", "n3"),
    "carpeta": ("carpeta",),
    "carpeta numero 3": ("carpeta", "n3"),
    "carpeta n 3": ("carpeta", "n3"),
    "carpeta de 3 anillos": ("carpeta", "tres anillos"),
    "carpeta tres anillos": ("carpeta", "tres anillos"),
    "carpeta oficio": ("carpeta", "oficio"),
    "carpeta con elastico": ("carpeta", "elastico"),
    "bibliorato": ("bibliorato",),
    "anotador": ("anotador",),
    "separadores": ("separadores",),
    "folio": ("folio",),
    "folios": ("folio",),
    "fundas": ("folio",),
    "ojalillos": ("ojalillos",),
    "refuerzos": ("ojalillos",),

    # --- Art ---
    "tempera": ("tempera",),
    "temperas": ("tempera",),
    "pintura": ("tempera", "pintura"),
    "acuarela": ("acuarela",),
    "acuarelas": ("acuarela",),
    "pincel": ("pincel",),
    "pinceles": ("pincel",),
    "pincel chato": ("pincel", "chato"),
    "pincel redondo": ("pincel", "redondo"),
    "crayones": ("crayones", "crayon"),
    "crayolas": ("crayones",),
    "ceras": ("crayones",),
    "plastilina": ("plastilina",),
    "masa para modelar": ("masa", "plastilina"),
    "porcelana fria": ("porcelana fria",),
    "arcilla": ("arcilla", "pasta para modelar"),
    "brillantina": ("brillantina", "glitter"),
    "purpurina": ("brillantina", "glitter"),
    "glitter": ("brillantina", "glitter"),
    "lentejuelas": ("lentejuelas",),
    "goma eva": ("goma eva",),
    "gomaeva": ("goma eva",),
    "foami": ("goma eva",),
    "fomi": ("goma eva",),
    "goma eva con brillo": ("goma eva", "glitter"),
    "telgopor": ("telgopor",),
    "tergopol": ("telgopor",),
    "palitos de helado": ("palitos",),
    "limpiapipas": ("limpiapipas",),
    "lana": ("lana",),
    "stickers": ("stickers",),
    "calcomanias": ("stickers",),

    # --- Office ---
    "abrochadora": ("abrochadora",),
    "engrapadora": ("abrochadora",),
    "broches": ("broches",),
    "grampas": ("broches",),
    "perforadora": ("perforadora",),
    "agujereadora": ("perforadora",),
    "clips": ("clips",),
    "chinches": ("chinches",),
    "bandas elasticas": ("bandas elasticas",),
    "gomitas": ("bandas elasticas",),
    "etiquetas": ("etiquetas",),
    "calculadora": ("calculadora",),
    "calculadora cientifica": ("calculadora cientifica",),
    "contact": ("contact", "autoadhesivo"),
    "papel contact": ("contact", "autoadhesivo"),
    "forro": ("forro", "contact"),
    "forrar": ("forro", "contact"),

    # --- Bags and cases ---
    "cartuchera": ("cartuchera",),
    "canopla": ("cartuchera",),
    "estuche": ("cartuchera", "estuche"),
    "mochila": ("mochila",),

    # --- Classroom and hygiene ---
    "tizas": ("tizas",),
    "tiza": ("tizas",),
    "pizarra": ("pizarra",),
    "mapa": ("mapa",),
    "mapas": ("mapa",),
    "diccionario": ("diccionario",),
    "panuelos": ("panuelos descartables",),
    "carilinas": ("panuelos descartables",),
    "rollo de cocina": ("rollo de cocina",),
    "toallitas humedas": ("toallitas humedas",),
    "alcohol en gel": ("alcohol en gel",),

    # --- English vocabulary ---
    "pen": ("boligrafo",),
    "pencil": ("lapiz",),
    "colored pencils": ("lapices de colores",),
    "glue": ("adhesivo",),
    "glue stick": ("adhesivo en barra",),
    "scissors": ("tijera",),
    "eraser": ("goma de borrar",),
    "sharpener": ("sacapuntas",),
    "ruler": ("regla",),
    "notebook": ("cuaderno",),
    "markers": ("marcadores",),
    "highlighter": ("resaltador",),
    "crayons": ("crayones",),
}
