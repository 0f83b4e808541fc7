"""
Hardcoded override rules.

Each rule corrects a mistake the matcher keeps making ("customer asked for X,
got Y, should have got Z"). Rules run after the matcher and always win.

ORDER IS PRECEDENCE: for every item only the first matching rule applies.
Put specific rules above the general ones that would also match
("goma eva" above "goma", "lapiz adhesivo" above "lapiz").

Patterns are searched in the normalized item text (lowercase, no accents,
punctuation as spaces: "N°3" becomes "n 3"). Target names must match a
catalog product name. Examples are checked by tests: each example must be
captured by its own rule and not by an earlier one.
"""

from models.override import OverrideRule

OVERRIDE_RULES: tuple[OverrideRule, ...] = (
    # =========================================================================
    # PENS
    # =========================================================================
    OverrideRule(
        name="lapicera-pluma",
        pattern=r"\bpluma\b",
        target_name="Lapicera Pluma Pelikan Pelikano Azul",
        examples=("lapicera pluma", "pluma fuente pelikano"),
    ),
    OverrideRule(
        name="boligrafo-borrable",
        pattern=r"\b(birome|lapicera|boligrafo)s? borrables?\b",
        target_name="Bolígrafo Borrable Filgo Replay Azul",
        examples=("birome borrable", "2 lapiceras borrables azules"),
    ),
    OverrideRule(
        name="boligrafo-gel",
        pattern=r"\b(birome|lapicera|boligrafo)s? (de )?gel\b",
        target_name="Bolígrafo Gel Filgo Gel Pop Azul",
        examples=("lapicera de gel", "birome gel"),
    ),
    OverrideRule(
        name="boligrafo-rojo",
        pattern=r"\b(birome|lapicera|boligrafo)s? (color )?roj[oa]s?\b",
        target_name="Bolígrafo Bic Cristal Rojo",
        examples=("birome roja", "lapiceras rojas"),
    ),
    OverrideRule(
        name="boligrafo-negro",
        pattern=r"\b(birome|lapicera|boligrafo)s? (color )?negr[oa]s?\b",
        target_name="Bolígrafo Bic Cristal Negro",
        examples=("birome negra", "boligrafo negro"),
    ),
    OverrideRule(
        name="boligrafo-verde",
        pattern=r"\b(birome|lapicera|boligrafo)s? (color )?verdes?\b",
        target_name="Bolígrafo Bic Cristal Verde",
        examples=("birome verde",),
    ),
    OverrideRule(
        name="boligrafo",
        pattern=r"\b(birome|virome|lapicera|boligrafo)s?\b|\bpens?\b",
        target_name="Bolígrafo Bic Cristal Azul",
        examples=("birome", "2 biromes azules", "lapicera azul", "boligrafo"),
    ),

    # =========================================================================
    # ADHESIVES (above pencils: "lapiz adhesivo" is glue)
    # =========================================================================
    OverrideRule(
        name="plasticola-color",
        pattern=r"\b(plasticola|cola vinilica|adhesivo vinilico)s? (de )?colou?r(es)?\b",
        target_name="Adhesivo Vinílico Plasticola Color x 6 Unidades",
        examples=("plasticola de color", "plasticolas de colores"),
    ),
    OverrideRule(
        name="plasticola-glitter",
        pattern=r"\bplasticolas? (con )?(brillos?|glitter)\b",
        target_name="Adhesivo Vinílico Plasticola con Glitter x 6 Unidades",
        examples=("plasticola con brillo", "plasticola glitter"),
    ),
    OverrideRule(
        name="plasticola",
        pattern=r"\bplasticolas?\b|\bcola vinilica\b|\badhesivo vinilico\b",
        target_name="Adhesivo Vinílico Plasticola 90 g",
        examples=("plasticola", "cola vinilica 250 g"),
    ),
    OverrideRule(
        name="voligoma",
        pattern=r"\b[vb]oligomas?\b|\badhesivo sintetico\b|\bgomas? (de|para) pegar\b",
        target_name="Adhesivo Sintético Voligoma 30 ml",
        examples=("voligoma", "boligoma", "goma de pegar", "goma para pegar"),
    ),
    OverrideRule(
        name="adhesivo-barra",
        pattern=(
            r"\b(barra|barrita)s? adhesivas?\b"
            r"|\b(pegamento|adhesivo) en barra\b"
            r"|\blapiz adhesivo\b|\bglue stick\b"
        ),
        target_name="Adhesivo en Barra Pritt 20 g",
        examples=("barra adhesiva", "pegamento en barra", "lapiz adhesivo"),
    ),
    OverrideRule(
        name="silicona-liquida",
        pattern=r"\bsilicona liquida\b",
        target_name="Adhesivo Silicona Líquida Eterna 30 ml",
        examples=("silicona liquida",),
    ),

    # =========================================================================
    # CORRECTION (above pencils: "lapiz corrector" is correction fluid)
    # =========================================================================
    OverrideRule(
        name="cinta-correctora",
        pattern=r"\bcinta correctora\b|\bcorrector (en )?cinta\b",
        target_name="Cinta Correctora Liquid Paper 5 mm",
        examples=("cinta correctora", "corrector en cinta"),
    ),
    OverrideRule(
        name="corrector",
        pattern=r"\bcorrector(es)?\b|\bliquid paper\b",
        target_name="Corrector Líquido Liquid Paper 7 ml",
        examples=("corrector", "lapiz corrector", "liquid paper"),
    ),

    # =========================================================================
    # PENCILS, EXPLICIT (above erasers: "lapiz negro con goma" is a pencil)
    # =========================================================================
    OverrideRule(
        name="lapices-acuarelables",
        pattern=r"\bacuarelables?\b",
        target_name="Lápices Acuarelables Faber-Castell x 12",
        examples=("lapices acuarelables",),
    ),
    OverrideRule(
        name="lapices-colores",
        pattern=(
            r"\blapi(z|s|ces) (de )?colou?r(es)?\b"
            r"|\blapices (largos|cortos)\b|\bcolou?red pencils\b"
        ),
        target_name="Lápices de Colores Faber-Castell x 12 Largos",
        examples=("lapices de colores", "caja de lapices de colores largos", "lapiz de color"),
    ),
    OverrideRule(
        name="lapiz-negro",
        pattern=r"\blapi(z|s|ces) (de )?(negros?|grafito|hb)\b",
        target_name="Lápiz Negro Faber-Castell HB",
        examples=("lapiz negro", "lapiz negro con goma", "lapiz de grafito hb"),
    ),

    # =========================================================================
    # ERASERS (goma eva above goma)
    # =========================================================================
    OverrideRule(
        name="goma-dos-colores",
        pattern=r"\bgoma (de borrar )?(lapiz y tinta|de tinta|tinta|dos colores|bicolor)\b",
        target_name="Goma de Borrar Dos Colores Staedtler",
        examples=("goma lapiz y tinta", "goma de borrar dos colores"),
    ),
    OverrideRule(
        name="goma-eva-glitter",
        pattern=r"\b(goma ?eva|foami|fomi)s?( con)? (brillos?|glitter|brillantina)\b",
        target_name="Goma Eva con Glitter 40x60 cm",
        examples=("goma eva con brillo", "goma eva glitter"),
    ),
    OverrideRule(
        name="goma-eva",
        pattern=r"\b(goma ?eva|foami|fomi)s?\b",
        target_name="Goma Eva Lisa 40x60 cm",
        examples=("goma eva", "3 gomaeva de colores", "foami"),
    ),
    OverrideRule(
        name="goma-de-borrar",
        pattern=r"\bgomas?\b|\bborrador\b|\beraser\b",
        target_name="Goma de Borrar Staedtler Blanca",
        examples=("goma", "goma de borrar blanca", "borrador"),
    ),

    # =========================================================================
    # PENCILS, GENERIC
    # =========================================================================
    OverrideRule(
        name="portaminas",
        pattern=r"\bportaminas\b",
        target_name="Portaminas Pentel 0.5 mm",
        examples=("portaminas 0 5",),
    ),
    OverrideRule(
        name="lapiz",
        pattern=r"\blapi[zs]\b|\bpencils?\b",
        target_name="Lápiz Negro Faber-Castell HB",
        examples=("lapiz", "2 lapiz"),
    ),

    # =========================================================================
    # TAPES (cinta de papel above cinta adhesiva)
    # =========================================================================
    OverrideRule(
        name="cinta-de-papel",
        pattern=r"\bcinta (de )?(papel|enmascarar)\b",
        target_name="Cinta de Papel 24 mm x 50 m",
        examples=("cinta de papel", "cinta papel"),
    ),
    OverrideRule(
        name="cinta-doble-faz",
        pattern=r"\bdoble faz\b",
        target_name="Cinta Doble Faz 12 mm x 10 m",
        examples=("cinta doble faz",),
    ),
    OverrideRule(
        name="cinta-adhesiva",
        pattern=r"\bcinta (scotch|adhesiva|transparente)\b|\bscotch\b",
        target_name="Cinta Adhesiva Transparente 18 mm x 30 m",
        examples=("cinta scotch", "cinta adhesiva", "scotch"),
    ),

    # =========================================================================
    # MARKERS
    # =========================================================================
    OverrideRule(
        name="marcador-pizarra",
        pattern=r"\bmarcador(es)? (de |para )?pizarra\b",
        target_name="Marcador para Pizarra Pelikan Negro",
        examples=("marcador para pizarra", "marcador de pizarra blanca"),
    ),
    OverrideRule(
        name="resaltador",
        pattern=r"\bresaltador(es)?\b|\bdestacador(es)?\b|\bmarcador(es)? fluo\b|\bhighlighters?\b",
        target_name="Resaltador Stabilo Boss Amarillo",
        examples=("resaltador", "destacador amarillo", "marcador fluo"),
    ),
    OverrideRule(
        name="microfibras",
        pattern=r"\bmicrofibras?\b",
        target_name="Microfibras Filgo x 10 Colores",
        examples=("microfibras", "microfibra negra"),
    ),
    OverrideRule(
        name="marcador-permanente",
        pattern=r"\bfibron(es)?\b|\bmarcador(es)? (gruesos?|permanentes?|indelebles?)\b|\bsharpie\b",
        target_name="Marcador Permanente Sharpie Negro",
        examples=("fibron", "marcador permanente negro", "fibrones"),
    ),
    OverrideRule(
        name="marcadores-escolares",
        pattern=r"\bfibr(a|ita)s\b|\bmarcadores\b|\bmarkers\b",
        target_name="Marcadores Escolares Filgo x 12",
        examples=("fibras", "fibritas", "marcadores finos"),
    ),

    # =========================================================================
    # ART
    # =========================================================================
    OverrideRule(
        name="crayones",
        pattern=r"\bcrayon(es)?\b|\bcrayolas?\b|\bceras\b|\bcrayons\b",
        target_name="Crayones Jovi x 12",
        examples=("crayones", "crayolas", "ceras"),
    ),
    OverrideRule(
        name="temperas",
        pattern=r"\btemperas?\b",
        target_name="Témperas Alba x 6 Colores",
        examples=("temperas", "tempera"),
    ),
    OverrideRule(
        name="acuarelas",
        pattern=r"\bacuarelas?\b",
        target_name="Acuarelas Pelikan x 12 Pastillas",
        examples=("acuarelas",),
    ),
    OverrideRule(
        name="pincel",
        pattern=r"\bpinceles?\b",
        target_name="Pincel Escolar Chato N° 8",
        examples=("pincel", "pinceles chatos"),
    ),
    OverrideRule(
        name="plastilina",
        pattern=r"\bplastilinas?\b|\bmasa (para|de) modelar\b",
        target_name="Plastilina Pelikan x 10 Colores",
        examples=("plastilina", "masa para modelar"),
    ),
    OverrideRule(
        name="brillantina",
        pattern=r"\bbrillantinas?\b|\bpurpurina\b|\bglitter\b",
        target_name="Brillantina x 6 Colores",
        examples=("brillantina", "purpurina", "glitter"),
    ),

    # =========================================================================
    # PAPER SOLD BY SHEET/METER (store only)
    # =========================================================================
    OverrideRule(
        name="papel-afiche",
        pattern=r"\bafiches?\b",
        target_name="Papel Afiche x Pliego",
        in_store_only=True,
        examples=("papel afiche", "2 afiches"),
    ),
    OverrideRule(
        name="cartulina",
        pattern=r"\bcartulinas?\b",
        target_name="Cartulina Lisa x Pliego",
        in_store_only=True,
        examples=("cartulina", "3 cartulinas de colores"),
    ),
    OverrideRule(
        name="papel-crepe",
        pattern=r"\bcrepe\b",
        target_name="Papel Crepé x Pliego",
        in_store_only=True,
        examples=("papel crepe",),
    ),
    OverrideRule(
        name="papel-madera",
        pattern=r"\bpapel madera\b",
        target_name="Papel Madera x Metro",
        in_store_only=True,
        examples=("papel madera",),
    ),
    OverrideRule(
        name="papel-barrilete",
        pattern=r"\bpapel (barrilete|seda)\b",
        target_name="Papel Barrilete x Pliego",
        in_store_only=True,
        examples=("papel barrilete", "papel seda"),
    ),

    # =========================================================================
    # PAPER IN PACKS
    # =========================================================================
    OverrideRule(
        name="glace-metalizado",
        pattern=r"\b(glase|glace)s? metalizados?\b|\bpapel metalizado\b",
        target_name="Papel Glacé Metalizado x 10 Hojas",
        examples=("papel glase metalizado", "papel metalizado"),
    ),
    OverrideRule(
        name="glace",
        pattern=r"\b(glase|glace|lustre)s?\b",
        target_name="Papel Glacé x 10 Hojas",
        examples=("papel glase", "sobre de glace", "papel lustre"),
    ),
    OverrideRule(
        name="block-el-nene-color",
        pattern=r"\bel nene\b|\bblock\b.*\bcolou?r(es)?\b|\bhojas de colou?r(es)?\b",
        target_name="Block El Nene N5 Color",
        examples=(
            "block el nene", "block de color", "hojas de colores",
            "block n5 color", "block n 5 de colores",
        ),
    ),
    OverrideRule(
        name="block-dibujo",
        pattern=r"\bcanson\b|\bblock (de )?dibujo\b|\bblock n ?5\b",
        target_name="Block de Dibujo Canson N5 Blanco",
        examples=("hojas canson", "block de dibujo", "block n 5"),
    ),

    # =========================================================================
    # NOTEBOOKS AND BINDERS (carpeta and cuaderno above loose sheets)
    # =========================================================================
    OverrideRule(
        name="carpeta-n3",
        pattern=(
            r"^(?!.*\b(repuestos?|hojas|folios?)\b.*\bcarpetas?\b)"
            r".*\bcarpetas?\b.*\b(n ?3|numero 3|nro 3|tres anillos|3 anillos)\b"
        ),
        target_name="Carpeta N3 Tres Anillos Lomo 40 mm",
        examples=(
            "carpeta n 3", "carpeta de 3 anillos", "carpeta numero 3 azul",
            "carpeta n3 con hojas rayadas",
        ),
    ),
    OverrideRule(
        name="cuaderno-abc",
        pattern=r"\bcuadernos?\b.*\b(abc|tapa dura|rivadavia)\b",
        target_name="Cuaderno ABC Rivadavia Tapa Dura 50 Hojas",
        examples=(
            "cuaderno abc", "cuaderno tapa dura rayado",
            "cuaderno abc tapa dura 50 hojas rayadas",
        ),
    ),
    OverrideRule(
        name="repuesto-cuadriculado",
        pattern=r"\b(repuestos?|hojas)\b.*\bcuadriculad[oa]s?\b",
        target_name="Repuesto Rivadavia N3 Cuadriculado x 48 Hojas",
        examples=("repuesto cuadriculado", "hojas n 3 cuadriculadas"),
    ),
    OverrideRule(
        name="repuesto-rayado",
        pattern=r"\brepuestos?\b|\bhojas (rayadas|n ?3|numero 3|nro 3)\b",
        target_name="Repuesto Rivadavia N3 Rayado x 48 Hojas",
        examples=(
            "repuesto", "hojas rayadas", "hojas n 3 para carpeta",
            "repuesto para carpeta n 3",
        ),
    ),
    OverrideRule(
        name="folios",
        pattern=r"\bfolios?\b",
        target_name="Folios N3 x 10 Unidades",
        examples=("folios", "10 folios n 3", "folios para carpeta n 3"),
    ),
    OverrideRule(
        name="ojalillos",
        pattern=r"\bojalillos?\b|\brefuerzos\b",
        target_name="Ojalillos Autoadhesivos x 100",
        examples=("ojalillos",),
    ),

    # =========================================================================
    # TOOLS
    # =========================================================================
    OverrideRule(
        name="sacapuntas",
        pattern=r"\bsaca ?puntas?\b|\bafilador\b|\bsharpener\b",
        target_name="Sacapuntas Maped Metálico",
        examples=("sacapuntas", "saca puntas", "afilador"),
    ),
    OverrideRule(
        name="tijera",
        pattern=r"\bti[jg]er(a|ita)s?\b|\bscissors\b",
        target_name="Tijera Escolar Maped Punta Roma 13 cm",
        examples=("tijera", "tijerita punta redonda", "tigera"),
    ),
    OverrideRule(
        name="juego-geometria",
        pattern=r"\b(juego|set) (de )?geometria\b",
        target_name="Juego de Geometría Maped 4 Piezas",
        examples=("juego de geometria",),
    ),
    OverrideRule(
        name="regla-30",
        pattern=r"\breglas? (de )?30\b",
        target_name="Regla Plástica 30 cm",
        examples=("regla de 30 cm", "regla 30"),
    ),
    OverrideRule(
        name="regla",
        pattern=r"\breglas?\b|\brulers?\b",
        target_name="Regla Plástica 20 cm",
        examples=("regla", "regla de 20 cm"),
    ),
    OverrideRule(
        name="escuadra",
        pattern=r"\bescuadras?\b",
        target_name="Escuadra 45° 20 cm",
        examples=("escuadra",),
    ),
    OverrideRule(
        name="transportador",
        pattern=r"\btransportador(es)?\b",
        target_name="Transportador 180° 12 cm",
        examples=("transportador",),
    ),
    OverrideRule(
        name="compas",
        pattern=r"\bcompas\b",
        target_name="Compás Maped Study",
        examples=("compas",),
    ),

    # =========================================================================
    # MISC
    # =========================================================================
    OverrideRule(
        name="cartuchera",
        pattern=r"\bcartucheras?\b|\bcanoplas?\b",
        target_name="Cartuchera Simple con Cierre",
        examples=("cartuchera", "canopla"),
    ),
    OverrideRule(
        name="etiquetas",
        pattern=r"\betiquetas?\b",
        target_name="Etiquetas Escolares x 24",
        examples=("etiquetas",),
    ),
    OverrideRule(
        name="abrochadora",
        pattern=r"\babrochadora\b|\bengrapadora\b",
        target_name="Abrochadora Pinza N 10",
        examples=("abrochadora",),
    ),
)
