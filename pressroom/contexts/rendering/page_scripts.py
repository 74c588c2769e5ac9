"""
In-page scripts evaluated by the readiness controller.

Predicates are passed to wait_for_function and polled until truthy; the
remaining scripts are passed to evaluate and run once.
"""

# Every <img> has fired load or error
IMAGES_SETTLED = "() => Array.from(document.images).every(img => img.complete)"

# FontFaceSet finished loading
FONTS_SETTLED = "() => !document.fonts || document.fonts.status === 'loaded'"

PRECOMPILED_STYLES_APPLIED = """
() => {
    const body = document.querySelector('body');
    return !!body && !!window.getComputedStyle(body) && document.readyState === 'complete';
}
"""

# The CDN build defines window.tailwind once loaded
UTILITY_CSS_ENGINE_DEFINED = "() => typeof window.tailwind !== 'undefined'"

# A probe element whose background is no longer the transparent default
UTILITY_CLASSES_APPLIED = """
() => {
    const probe = document.querySelector('[class*="bg-"]') || document.body;
    if (!probe) return false;
    const color = window.getComputedStyle(probe).backgroundColor;
    return color !== 'rgba(0, 0, 0, 0)' && color !== 'transparent'
        && document.readyState === 'complete';
}
"""

FORCE_STYLE_RECALCULATION = """
() => {
    const root = document.documentElement;
    root.style.transform = 'translateZ(0)';
    void root.offsetHeight;
    root.style.transform = '';
    let touched = 0;
    document.querySelectorAll('*').forEach(el => {
        if (el.classList.length > 0) {
            window.getComputedStyle(el).getPropertyValue('display');
            touched += 1;
        }
    });
    return touched;
}
"""

SCROLL_THROUGH_PAGE = """
async ({ step, delayMs }) => {
    const scrollHeight = document.documentElement.scrollHeight;
    let steps = 0;
    for (let y = 0; y < scrollHeight; y += step) {
        window.scrollTo(0, y);
        steps += 1;
        await new Promise(resolve => setTimeout(resolve, delayMs));
    }
    window.scrollTo(0, 0);
    return steps;
}
"""
